"""Serverless entrypoint; the platform imports ``app`` from this module."""

import sys
from pathlib import Path

_SRC_DIR = str(Path(__file__).resolve().parent.parent / "src")
if _SRC_DIR not in sys.path:
    sys.path.append(_SRC_DIR)

from nutri_guide.api.app import create_app  # noqa: E402
from nutri_guide.containers import build_container  # noqa: E402

app = create_app(build_container())
