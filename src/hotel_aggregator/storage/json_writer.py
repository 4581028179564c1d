"""JSON snapshot helpers for aggregated catalogues."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable


class JsonStore:
    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def write(
        self,
        data: Iterable[dict[str, object]] | dict[str, object],
        *,
        filename: str,
        subdir: str | None = None,
    ) -> Path:
        target_dir = self.root / subdir if subdir else self.root
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / filename
        serialisable: dict[str, object] = {
            "generated_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }
        if isinstance(data, dict):
            serialisable.update(data)
        else:
            serialisable["items"] = list(data)
        path.write_text(json.dumps(serialisable, indent=2, ensure_ascii=False))
        return path
