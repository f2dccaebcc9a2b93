from __future__ import annotations

import re
from pathlib import Path

from setuptools import find_packages, setup  # type: ignore


ROOT = Path(__file__).resolve().parent


def _read_version() -> str:
    text = (ROOT / "src" / "regrelay" / "_version.py").read_text(encoding="utf-8")
    match = re.search(r"__version__ = \"([^\"]+)\"", text)
    if match is None:
        raise RuntimeError("__version__ not found in src/regrelay/_version.py")
    return match.group(1)


setup(
    name="regrelay",
    version=_read_version(),
    description="Device registration relay: query-string HTTP registry server plus client SDK",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "httpx>=0.27",
    ],
    extras_require={
        "test": [
            "pytest>=8",
        ],
    },
    entry_points={
        "console_scripts": [
            "regrelay=regrelay.__main__:main",
        ],
    },
)
