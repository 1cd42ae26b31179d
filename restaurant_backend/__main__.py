"""
Run the API with uvicorn.

Usage:
    python -m restaurant_backend
"""
import os

import uvicorn

if __name__ == "__main__":
    port = int(os.getenv("PORT", "8080").strip())

    uvicorn.run(
        "restaurant_backend.app:app",
        host="0.0.0.0",
        port=port,
        reload=False,
        log_level="info",
    )
