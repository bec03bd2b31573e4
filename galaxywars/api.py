from __future__ import annotations

import random
from collections import Counter
from dataclasses import asdict
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .config import load_settings
from .meta import HighscoreStore
from .waves import generate_wave, kamikaze_cap, tank_cap


app = FastAPI(title="Galaxy Wars Backend")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # adjust for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ScoreSubmission(BaseModel):
    score: int


def _store():
    settings = load_settings()
    return settings, HighscoreStore(settings.meta.save_path, settings.meta.highscore_key)


@app.get("/api/settings")
def get_settings() -> Dict[str, Any]:
    s = load_settings()
    return {
        "window": asdict(s.window),
        "player": asdict(s.player),
        "enemy": asdict(s.enemy),
        "wave": asdict(s.wave),
        "difficulty": asdict(s.difficulty),
        "projectile": asdict(s.projectile),
        "powerup": asdict(s.powerup),
        "input": asdict(s.input),
    }


@app.get("/api/highscore")
def get_highscore() -> Dict[str, Any]:
    _, store = _store()
    return {"highscore": store.load()}


@app.post("/api/highscore")
def submit_highscore(req: ScoreSubmission) -> Dict[str, Any]:
    if req.score < 0:
        raise HTTPException(400, "score must be non-negative")
    _, store = _store()
    accepted = store.submit(req.score)
    return {"accepted": accepted, "highscore": store.load()}


@app.post("/api/highscore/reset")
def reset_highscore() -> Dict[str, Any]:
    _, store = _store()
    store.reset()
    return {"highscore": 0}


@app.get("/api/waves/{level}")
def preview_wave(level: int, seed: Optional[int] = None) -> Dict[str, Any]:
    if level < 1:
        raise HTTPException(400, f"level must be >= 1, got {level}")
    settings = load_settings()
    roster = generate_wave(level, settings, random.Random(seed), settings.window.width)
    counts = Counter(e.kind.value for e in roster)
    return {
        "level": level,
        "size": len(roster),
        "counts": {k: counts.get(k, 0) for k in ("normal", "tank", "kamikaze")},
        "caps": {"tank": tank_cap(level), "kamikaze": kamikaze_cap(level)},
    }
