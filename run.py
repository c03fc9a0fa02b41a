#!/usr/bin/env python3
"""
Run script for the Storefront API.
This script launches the FastAPI server with the auth and catalog routers mounted.
"""
import os
import sys
import traceback

import uvicorn

if __name__ == "__main__":
    port = int(os.getenv("PORT", 8000))
    try:
        # Print information about the server
        print("Starting Storefront API server...")
        print(f"Access the API at http://localhost:{port}")
        print(f"API documentation at http://localhost:{port}/docs")

        # Run the server
        uvicorn.run(
            "storefront.main:app",
            host=os.getenv("HOST", "0.0.0.0"),
            port=port,
            reload=os.getenv("STOREFRONT_ENV", "development") == "development",
            log_level="info"
        )
    except Exception as e:
        print(f"Error starting server: {e}")
        traceback.print_exc()
        sys.exit(1)
