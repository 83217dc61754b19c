from typing import Optional

from fastapi import FastAPI, File, HTTPException, Response, UploadFile

from .models import Feed, FeedFormat, HealthResponse, NormalizeReport, NormalizeResponse
from .normalize import marshal_result, parse_report
from .rules import MEDIA_TYPES, UPLOAD_SUFFIXES

app = FastAPI(
    title="feed-normalizer",
    description="Normalize RSS, RDF and Atom feeds into one model and back",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/normalize", response_model=NormalizeResponse)
async def normalize_feed(file: UploadFile = File(...)):
    if file.filename and not file.filename.lower().endswith(UPLOAD_SUFFIXES):
        raise HTTPException(status_code=422, detail="Only XML feed files are supported")

    raw = await file.read()
    result, fmt, encoding = parse_report(raw)
    return NormalizeResponse(
        feed=result.feed,
        report=NormalizeReport(
            format=fmt,
            encoding=encoding,
            ok=result.ok,
            warnings=result.warnings,
            errors=result.errors,
        ),
    )

@app.post("/encode")
def encode_feed(feed: Feed, target: Optional[FeedFormat] = None):
    result = marshal_result(feed, target)
    if not result.ok:
        raise HTTPException(
            status_code=422,
            detail=[issue.model_dump(mode="json") for issue in result.errors],
        )

    fmt = target.value if target is not None else feed.format
    return Response(content=result.data, media_type=MEDIA_TYPES[fmt])
