"""CPU path tracer built around a stratified next-event-estimation integrator.

This package estimates the radiance arriving along camera rays with Monte
Carlo path tracing:
- Stratified sampling at the primary hit
- Next-event estimation (direct light) at every diffuse bounce
- Specular shortcut to emitters without double counting
- Immutable compiled scenes shared safely across threads

Subpackages:
    core: Vectors, rays, configuration, errors and the render driver
    geometry: Shape interface, primitives and the BVH
    materials: Material parameters and the bounce decision
    scene: Scene builder, compiled scene (the integrator) and demo scenes
    camera: Camera models with ray generation
    preview: Tone mapping and image export
"""

__version__ = "0.1.0"
