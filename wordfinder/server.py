import logging

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse

from wordfinder.settings import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("wordfinder")

# Populated at startup from settings.MATRIX_PATH, when present
_index = None


def create_app() -> FastAPI:
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        global _index

        from wordfinder.loader import load_matrix
        from wordfinder.solver import ConfigurationError, build

        _index = None
        if settings.MATRIX_PATH.exists():
            logger.info("Loading matrix from %s", settings.MATRIX_PATH)
            try:
                _index = build(load_matrix(settings.MATRIX_PATH), settings.MAX_SIZE)
                logger.info("Matrix loaded (%dx%d)", *_index.shape)
            except ConfigurationError as e:
                logger.error("Default matrix rejected: %s", e)
        else:
            logger.warning("No matrix at %s, requests must send one", settings.MATRIX_PATH)

        yield

    application = FastAPI(title="Word Finder", lifespan=lifespan)

    @application.get("/health")
    async def health():
        return {"status": "ok", "matrix_loaded": _index is not None}

    @application.post("/find")
    async def find(request: Request):
        from wordfinder.metrics import StageTimer
        from wordfinder.solver import ConfigurationError, build

        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(400, "Request body must be JSON")
        if not isinstance(body, dict):
            raise HTTPException(400, "Request body must be a JSON object")

        words = body.get("words")
        if not isinstance(words, list):
            raise HTTPException(400, "'words' must be a list of strings")

        limit = body.get("limit", settings.NUMBER_OF_RESULTS)
        if not isinstance(limit, int) or isinstance(limit, bool):
            raise HTTPException(400, "'limit' must be an integer")

        timer = StageTimer()

        matrix = body.get("matrix")
        if matrix is not None:
            if not isinstance(matrix, list) or not all(isinstance(r, str) for r in matrix):
                raise HTTPException(400, "'matrix' must be a list of strings")
            with timer.stage("matrix setup"):
                try:
                    index = build(matrix, settings.MAX_SIZE)
                except ConfigurationError as e:
                    raise HTTPException(400, str(e))
        elif _index is not None:
            index = _index
        else:
            raise HTTPException(400, "No matrix loaded, send one in 'matrix'")

        logger.info("POST /find words=%d matrix=%dx%d", len(words), *index.shape)

        with timer.stage("search"):
            results = index.find_counts(words, limit)

        for word, count in results:
            logger.info("    Word = %s, Count = %d", word, count)

        payload = {
            "rows": index.shape[0],
            "columns": index.shape[1],
            "words": [w for w, _ in results],
            "counts": [{"word": w, "count": c} for w, c in results],
            "processing_time": timer.total_ms,
            "stage_timings": timer.summary(),
        }
        if settings.DEBUG:
            _save_debug_artifacts(payload, words)
        return JSONResponse(payload)

    @application.get("/api/settings")
    async def api_get_settings():
        from wordfinder.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from wordfinder.settings import update_settings, get_editable_settings
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(400, "Request body must be JSON")
        if not isinstance(body, dict):
            raise HTTPException(400, "Request body must be a JSON object")
        errors = update_settings(settings, **body)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


def _save_debug_artifacts(payload, words):
    import json
    from datetime import datetime

    debug_dir = settings.BASE_DIR / "debug"
    debug_dir.mkdir(exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

    with open(debug_dir / f"{ts}_result.json", "w") as f:
        json.dump({"timestamp": ts, "input_words": words, **payload}, f, indent=2)

    logger.info("Saved debug artifacts to debug/%s_result.json", ts)


app = create_app()
