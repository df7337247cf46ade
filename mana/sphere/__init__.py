from .sphere_element import SphereElement, tangent_frame

__all__ = ["SphereElement", "tangent_frame"]
