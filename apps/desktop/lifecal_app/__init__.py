"""LifeCal desktop preview app, command-line tools, and image server."""
