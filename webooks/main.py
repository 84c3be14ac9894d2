"""
Webooks - main entry point.

Runs the API server:
    python -m webooks.main
or
    uvicorn webooks.api.app:app --reload
"""

from __future__ import annotations

import uvicorn

from webooks.config import get_settings


def main():
    """Main entry point."""
    settings = get_settings()
    uvicorn.run(
        "webooks.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug and not settings.is_production,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
