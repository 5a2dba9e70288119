import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config import get_cors_origins
from routes import tools, chat

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)

app = FastAPI(title="AdvogaAI Tools API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tools.router, prefix="/tools", tags=["AdvogaAI Tools"])
app.include_router(chat.router, prefix="/chat", tags=["Case Chat"])


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
