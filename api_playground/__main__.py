"""Run the API Playground with uvicorn: ``python -m api_playground``."""

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "api_playground.main:app",
        host=os.environ.get("API_PLAYGROUND_HOST", "127.0.0.1"),
        port=int(os.environ.get("API_PLAYGROUND_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
