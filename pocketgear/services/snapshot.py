import json
from pathlib import Path
from typing import Any, Dict, List, Union
import aiofiles


class SnapshotReader:
    """Reads the bundled product snapshot used when the store is unreachable."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    async def read(self) -> List[Dict[str, Any]]:
        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            content = await f.read()

        products = json.loads(content)
        if not isinstance(products, list) or not all(isinstance(p, dict) for p in products):
            raise ValueError(f"Snapshot {self.path} is not a list of product objects")
        return products
