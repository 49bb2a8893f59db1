class PseudoversionCache:
    """Pseudoversions derived for each component's commit during one rebase run."""

    def __init__(self):
        self._versions: dict[str, str] = {}

    def get(self, component: str) -> str | None:
        return self._versions.get(component)

    def put(self, component: str, pseudoversion: str) -> None:
        self._versions[component] = pseudoversion

    def clear(self) -> None:
        self._versions.clear()

    def __contains__(self, component: str) -> bool:
        return component in self._versions

    def __len__(self) -> int:
        return len(self._versions)
