import uvicorn

from config import HOST, PORT

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=HOST,
        port=PORT,
        reload=True,
        # Exclude the demo page and tests from the reload watcher
        reload_excludes=["static/*", "tests/*"]
    )
