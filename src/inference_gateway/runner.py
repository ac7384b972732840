import os

import uvicorn


def main():
    """Entry point for the inference-gateway console script."""
    reload = os.getenv("INFERENCE_GATEWAY_RELOAD", "false").lower() in ("true", "1", "t")
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run("inference_gateway.main:app", host="0.0.0.0", port=port, reload=reload)


if __name__ == "__main__":
    main()
