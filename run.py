import uvicorn

from coffeeshop.app import app
from coffeeshop.config import settings

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000, reload=False, log_level=settings.log_level.lower())
