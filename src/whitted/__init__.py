"""Whitted-style recursive ray tracer.

Renders scenes of transformed primitives, groups and CSG solids with Phong
shading, hard shadows, mirror reflection and refraction blended by Schlick's
Fresnel approximation.

Subpackages:
    core: Tuples, matrices, rays, intersections, the shading integrator,
        the canvas and the parallel renderer
    geometry: Shape primitives, groups, CSG and bounding boxes
    materials: Materials, patterns, point lights and the Phong model
    camera: Pinhole camera and batch primary-ray generation
    scene: World container, OBJ loading, scene files and built-in scenes
    preview: Image export and matplotlib preview
"""

__version__ = "0.1.0"
