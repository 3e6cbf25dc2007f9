import logging
import random
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from markov_text.config import settings
from markov_text.services.text import EmptyCorpusError, Text, TextOptions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/markov", tags=["markov"])

# In-memory model cache (CPU-friendly)
MODEL_CACHE: Dict[str, Text] = {}


class TrainRequest(BaseModel):
    text: Optional[str] = None
    corpus: List[str] = []
    model_name: str = "default"
    state_size: int = Field(default=settings.MARKOV_STATE_SIZE, ge=1, le=5)


class GenerateRequest(BaseModel):
    model_name: str = "default"
    tries: int = Field(default=settings.MARKOV_TRIES, ge=0, le=settings.MARKOV_MAX_TRIES)
    min_words: int = Field(default=settings.MARKOV_MIN_WORDS, ge=0)
    max_words: int = Field(default=settings.MARKOV_MAX_WORDS, ge=0)
    start: str = ""
    strict: bool = True
    count: int = Field(default=1, ge=1, le=50)


def _model_stats(model: Text) -> dict:
    stats = model.stats()
    return {
        "sentences": stats.sentences,
        "vocab_size": stats.vocab_size,
        "states": stats.states,
        "state_size": model.state_size,
    }


@router.post("/train")
def train(req: TrainRequest):
    raw = req.text if req.text is not None else "\n".join(req.corpus)
    if not raw.strip():
        raise HTTPException(status_code=400, detail="corpus is empty")
    if req.model_name not in MODEL_CACHE and len(MODEL_CACHE) >= settings.MARKOV_MAX_MODELS:
        raise HTTPException(status_code=409, detail="model cache is full, delete a model first")

    rng = random.Random(settings.MARKOV_SEED) if settings.MARKOV_SEED is not None else None
    try:
        model = Text(
            raw,
            state_size=req.state_size,
            rng=rng,
            max_overlap_ratio=settings.MARKOV_MAX_OVERLAP_RATIO,
            max_overlap_total=settings.MARKOV_MAX_OVERLAP_TOTAL,
        )
    except EmptyCorpusError as e:
        raise HTTPException(status_code=400, detail=str(e))

    MODEL_CACHE[req.model_name] = model
    logger.info(f"[Markov] Trained model '{req.model_name}'")
    return {"ok": True, "data": {"model": req.model_name, **_model_stats(model)}}


@router.post("/generate")
def generate(req: GenerateRequest):
    model = MODEL_CACHE.get(req.model_name)
    if not model:
        raise HTTPException(status_code=404, detail="model not found, train first")

    options = TextOptions(tries=req.tries, min_words=req.min_words, max_words=req.max_words)
    texts = []
    for _ in range(req.count):
        if req.start:
            try:
                text = model.generate_with_start(req.start, options, strict=req.strict)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
        else:
            text = model.generate(options)
        texts.append(text)

    return {"ok": True, "data": {"text": texts[0], "texts": texts}}


@router.get("/models")
async def list_models():
    return {
        "ok": True,
        "data": {name: _model_stats(model) for name, model in MODEL_CACHE.items()},
    }


@router.delete("/models/{model_name}")
async def delete_model(model_name: str):
    if MODEL_CACHE.pop(model_name, None) is None:
        raise HTTPException(status_code=404, detail="model not found")
    logger.info(f"[Markov] Deleted model '{model_name}'")
    return {"ok": True, "data": {"model": model_name}}
