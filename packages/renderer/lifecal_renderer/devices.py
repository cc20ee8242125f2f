"""Built-in phone presets and canvas resolution."""

from __future__ import annotations

from dataclasses import dataclass

from .models import CanvasSpec


@dataclass(frozen=True)
class DevicePreset:
    id: str
    name: str
    width: int
    height: int
    safe_area_top: float
    safe_area_bottom: float

    @property
    def dimensions(self) -> str:
        return f"{self.width} × {self.height}"


DEFAULT_DEVICE_ID = "iphone15pro"

DEVICES: dict[str, DevicePreset] = {
    "iphone16promax": DevicePreset("iphone16promax", "iPhone 16 Pro Max", 1320, 2868, 0.25, 0.05),
    "iphone16pro": DevicePreset("iphone16pro", "iPhone 16 Pro", 1206, 2622, 0.25, 0.05),
    "iphone15promax": DevicePreset("iphone15promax", "iPhone 15 Pro Max", 1290, 2796, 0.25, 0.05),
    "iphone15pro": DevicePreset("iphone15pro", "iPhone 15 Pro", 1179, 2556, 0.25, 0.05),
    "iphone15": DevicePreset("iphone15", "iPhone 15 / 14", 1170, 2532, 0.22, 0.05),
    "iphone13": DevicePreset("iphone13", "iPhone 13", 1170, 2532, 0.22, 0.05),
    "iphone13mini": DevicePreset("iphone13mini", "iPhone 13 mini", 1080, 2340, 0.22, 0.05),
    "iphonese": DevicePreset("iphonese", "iPhone SE", 750, 1334, 0.18, 0.05),
}


def get_device(device_id: str | None) -> DevicePreset:
    if not device_id:
        return DEVICES[DEFAULT_DEVICE_ID]
    return DEVICES.get(device_id, DEVICES[DEFAULT_DEVICE_ID])


def list_devices() -> list[dict[str, str]]:
    return [{"id": d.id, "name": d.name, "dimensions": d.dimensions} for d in DEVICES.values()]


def resolve_canvas(
    device_id: str | None = None,
    width: int | None = None,
    height: int | None = None,
) -> CanvasSpec:
    """Resolve pixel size and safe-area insets for a render call.

    Explicit ``width`` and ``height`` win over the preset when both are
    positive; the safe-area fractions always come from the (possibly default)
    preset.
    """
    device = get_device(device_id)
    if width and height and width > 0 and height > 0:
        w, h = int(width), int(height)
    else:
        w, h = device.width, device.height
    return CanvasSpec(width=w, height=h, safe_area_top=device.safe_area_top, safe_area_bottom=device.safe_area_bottom)
