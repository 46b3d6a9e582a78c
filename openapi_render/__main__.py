"""Entry point: python -m openapi_render --spec SPEC --template DIR [TARGET]"""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    main()
