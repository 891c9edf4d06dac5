# utils/io.py
import os
from typing import List


def ensure_dir(path: str):
    os.makedirs(path, exist_ok=True)


def read_lines(path: str) -> List[str]:
    """File contents split into lines, newline characters dropped."""
    with open(path, "r", encoding="utf-8") as f:
        return f.read().splitlines()
