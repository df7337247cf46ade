from .so2_group_element import SO2Element, rotation_matrix_2d

__all__ = ["SO2Element", "rotation_matrix_2d"]
