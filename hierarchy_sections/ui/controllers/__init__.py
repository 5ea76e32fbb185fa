from .section_controller import SectionController

__all__ = ["SectionController"]
