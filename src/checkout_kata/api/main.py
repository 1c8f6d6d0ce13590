import traceback

from fastapi import FastAPI, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from checkout_kata import __version__
from checkout_kata.engine import build_receipt, receipt_filename
from checkout_kata.config.settings import get_settings, normalize_items
from checkout_kata.api.state import engine

app = FastAPI(
    title="Checkout Kata API",
    description="Backend API for the supermarket checkout calculator",
    version=__version__
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CalcRequest(BaseModel):
    items: str = ""


@app.get("/")
async def root():
    return {"status": "online", "message": "Checkout Kata API Active"}


@app.get("/catalog")
async def get_catalog():
    return [
        {
            "item": item,
            "unit_price": rule.unit_price,
            "special_quantity": rule.special_quantity,
            "special_price": rule.special_price,
            "offer": rule.offer_text(),
        }
        for item, rule in sorted(engine.catalog.items())
    ]


@app.post("/calculate")
async def calculate_total(req: CalcRequest):
    try:
        result = engine.calculate(normalize_items(req.items))
        return jsonable_encoder(result)
    except Exception as e:
        traceback.print_exc()
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/receipt", response_class=PlainTextResponse)
async def download_receipt(req: CalcRequest):
    try:
        result = engine.calculate(normalize_items(req.items))
        text = build_receipt(result)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return PlainTextResponse(
        text,
        headers={"Content-Disposition": f'attachment; filename="{receipt_filename()}"'}
    )


@app.get("/examples")
async def get_examples():
    settings = get_settings()
    return [
        {"input": example, "output": engine.compute_total(example)}
        for example in settings.example_inputs
    ]


@app.get("/system/status")
async def get_status():
    return {
        "engine_active": True,
        "catalog_source": engine.catalog_source,
        "catalog_items": len(engine.catalog),
    }
