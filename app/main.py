# Run from project root: uvicorn app.main:app --reload

import logging

from fastapi import FastAPI

from app.api.routes import router
from app.core.config import LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL)


app = FastAPI(title="Document Q&A")
app.include_router(router)


if __name__ == "__main__":
    print("Document Q&A service booting...")
