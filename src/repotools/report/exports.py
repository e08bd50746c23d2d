from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence

import pandas as pd


def export_report(output_path: Path, rows: Sequence[Dict[str, object]], columns: List[str]) -> Path:
    """Write `rows` as CSV with a fixed column order; an empty report keeps its header."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    frame = pd.DataFrame(list(rows), columns=columns)
    frame.to_csv(output_path, index=False, encoding="utf_8_sig")
    return output_path
