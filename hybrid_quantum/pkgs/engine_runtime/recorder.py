"""
Recording of per-measurement and per-epoch rows with CSV and JSONL export.
"""
import csv
import json
import os
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

import numpy as np
import torch

logger = logging.getLogger(__name__)


class SimpleRecorder:
    """General purpose recorder for dictionary-based logs."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.rows: List[Dict[str, Any]] = []
        self._metadata: Dict[str, Any] = {
            'created_at': datetime.now(timezone.utc).isoformat(),
        }

    @property
    def metadata(self) -> Dict[str, Any]:
        return dict(self._metadata)

    def set_metadata(self, **kwargs):
        """Set metadata that is written alongside recordings."""
        self._metadata.update(kwargs)

    def log(self, row: Dict[str, Any]):
        """Log a dictionary row with automatic type conversion."""
        if not self.enabled:
            return

        clean_row: Dict[str, Any] = {'timestamp': datetime.now(timezone.utc).isoformat()}
        for k, v in row.items():
            if isinstance(v, bool):
                clean_row[k] = v
            elif isinstance(v, (int, float, np.number)):
                clean_row[k] = float(v)
            elif isinstance(v, torch.Tensor):
                clean_row[k] = v.item() if v.numel() == 1 else v.detach().cpu().numpy().tolist()
            elif isinstance(v, np.ndarray):
                clean_row[k] = float(v.item()) if v.size == 1 else v.tolist()
            elif isinstance(v, (list, tuple)):
                clean_row[k] = [float(x) if isinstance(x, (int, float, np.number)) else str(x) for x in v]
            elif v is None:
                clean_row[k] = None
            else:
                clean_row[k] = str(v)
        self.rows.append(clean_row)

    def dump_metadata(self, path: str) -> str:
        """Write metadata and the row count to a ``.meta.json`` file beside ``path``."""
        meta_path = f"{os.path.splitext(path)[0]}.meta.json"
        os.makedirs(os.path.dirname(meta_path) or ".", exist_ok=True)
        with open(meta_path, "w") as f:
            json.dump({**self._metadata, 'rows': len(self.rows)}, f, indent=2)
        return meta_path

    def dump_csv(self, path: str):
        """Dump logs to CSV file; columns are the union of all row keys."""
        if not self.enabled or not self.rows:
            return

        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        keys = sorted({k for row in self.rows for k in row})

        with open(path, "w", newline="") as f:
            w = csv.DictWriter(f, fieldnames=keys)
            w.writeheader()
            w.writerows(self.rows)
        self.dump_metadata(path)
        logger.debug(f"Wrote {len(self.rows)} rows to {path}")

    def dump_jsonl(self, path: str):
        """Dump logs to JSONL file."""
        if not self.enabled or not self.rows:
            return

        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w") as f:
            for row in self.rows:
                f.write(json.dumps(row) + "\n")
        self.dump_metadata(path)
        logger.debug(f"Wrote {len(self.rows)} rows to {path}")

    def get_recent(self, n: int = 10) -> List[Dict[str, Any]]:
        return self.rows[-n:] if n > 0 else []

    def clear(self):
        self.rows.clear()
