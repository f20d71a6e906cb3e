"""Camera module.

Components:
    camera: Pinhole camera with view transform, per-pixel rays and a serial
        render loop
    raygen: Taichi kernel producing a block of primary rays at once

``raygen`` imports Taichi and is not imported here. Import it directly:
    from whitted.camera.raygen import generate_primary_rays
"""

from .camera import Camera

__all__ = ["Camera"]
