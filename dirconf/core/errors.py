from __future__ import annotations


class DirconfError(Exception):
    pass


class DeclarationNotFoundError(DirconfError):
    def __init__(self, path: str):
        super().__init__(f"Unknown path {path}")
        self.path = path


class DeclarationError(DirconfError):
    pass


class StructuralTemplateError(DirconfError):
    pass


class ObjectiveError(DirconfError):
    pass
