"""In-memory icon content cache owned by a single loader instance."""

from __future__ import annotations

from typing import Dict, List, Optional


class IconCache:
    """Icon name -> raw SVG markup, filled on first successful fetch.

    Entries are never evicted or replaced; a second ``store`` for a name that
    is already present keeps the first content so every marker requesting
    that name receives identical markup.
    """

    def __init__(self) -> None:
        self._content: Dict[str, str] = {}

    def __contains__(self, icon_name: object) -> bool:
        return icon_name in self._content

    def __len__(self) -> int:
        return len(self._content)

    def get(self, icon_name: str) -> Optional[str]:
        return self._content.get(icon_name)

    def store(self, icon_name: str, content: str) -> str:
        """Cache ``content`` for ``icon_name`` and return the cached value."""
        return self._content.setdefault(icon_name, content)

    def names(self) -> List[str]:
        """Snapshot of loaded icon names in load order."""
        return list(self._content)
