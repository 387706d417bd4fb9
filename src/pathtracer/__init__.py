"""
Stochastic path tracer for scenes made of spheres.

Subpackages:
    core: vectors, rays and sampling helpers
    camera: pinhole camera
    geometry: spheres and the closest-hit object list
    materials: diffuse, metal, glass, textured and emissive materials
    renderer: path-tracing integrator and the parallel band renderer
"""

__version__ = "0.1.0"
