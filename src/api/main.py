from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes.assist import router as assist_router
from src.api.routes.chunks import router as chunks_router
from src.api.routes.library import router as library_router
from src.api.routes.notes import router as notes_router

app = FastAPI(
    title="Study Notes API",
    description="Chunked LLM study-note generation from video transcripts",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
    ],
    allow_origin_regex=r"https://.*\.vercel\.app|http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chunks_router)
app.include_router(notes_router)
app.include_router(library_router)
app.include_router(assist_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
