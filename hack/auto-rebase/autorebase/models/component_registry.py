from autorebase.models.component import Component, Policy


class ComponentRegistry:
    """Tracked release components and the policy class each belongs to."""

    def __init__(self, components: list[Component]):
        self.components: list[Component] = components

    def get(self, name: str) -> Component | None:
        return next((c for c in self.components if c.name == name), None)

    def by_policy(self, policy: Policy) -> list[Component]:
        return [c for c in self.components if c.policy == policy]

    def lookup_components(self) -> list[str]:
        # directives name components by the directory they are checked out to
        return [c.checkout_name for c in self.by_policy("embedded-component")]

    def is_lookup_component(self, name: str) -> bool:
        return name in self.lookup_components()
