import uvicorn
from dynamic_filter.main import app

if __name__ == "__main__":
    uvicorn.run(
        "dynamic_filter.main:app",
        reload=True,     # Auto-reload on code changes
        workers=1        # Number of worker processes
    )
