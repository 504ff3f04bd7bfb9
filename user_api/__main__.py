"""Run the service with uvicorn: ``python -m user_api``."""
from __future__ import annotations

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "user_api.app:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "1323")),
    )


if __name__ == "__main__":
    main()
