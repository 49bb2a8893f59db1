from autorebase.models import Component, ComponentRegistry, ComponentsFile
from autorebase.utils.yaml_loader import load_yaml_file


class ComponentRepository:
    def __init__(self, file_path: str):
        self.file_path: str = file_path

    def find_all(self) -> list[Component]:
        data = load_yaml_file(self.file_path)
        if not data:
            return []
        try:
            return ComponentsFile(**data).components
        except Exception as e:
            raise ValueError(f"Invalid components.yaml structure: {e}") from e

    def registry(self) -> ComponentRegistry:
        return ComponentRegistry(self.find_all())
