from .section_tree_widget import SectionTreeWidget

__all__ = ["SectionTreeWidget"]
