"""
AGCWD HTTP service.

Exposes the enhancement core to hosts that hold images as uploads or
dynamic values rather than Python buffers:

    GET  /api/health   service status
    POST /api/enhance  multipart PNG upload -> enhanced PNG
    POST /api/curve    brightness histogram -> 256-entry curve

Usage:
    agcwd-server --host 127.0.0.1 --port 8000
"""

import argparse
import logging
import os
import shutil
import tempfile
from typing import List, Optional

import numpy as np
import uvicorn
from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel

from . import __version__
from .loaders import load_png, save_png
from .options import AgcwdOptions
from .processing.enhance import Agcwd
from .processing.intensity import agcwd_curve, curve_to_lut
from .utils.constants import DEFAULT_ALPHA, DEFAULT_FUSION, NUM_LEVELS
from .utils.logger import setup_logger

logger = logging.getLogger(__name__)

app = FastAPI(title="AGCWD Enhancement Service")

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Constants
MAX_UPLOAD_SIZE = 200_000_000  # 200MB limit for uploaded images


class CurveRequest(BaseModel):
    histogram: List[int]
    alpha: float = DEFAULT_ALPHA


@app.get("/api/health")
async def health():
    """Report that the service is up."""
    return {"status": "ok", "version": __version__}


@app.post("/api/enhance")
async def enhance_png(
    file: UploadFile = File(...),
    alpha: float = Query(DEFAULT_ALPHA, description="Weighting-distribution exponent in (0, 1]"),
    fusion: float = Query(DEFAULT_FUSION, description="Weight of the original image in [0, 1]"),
):
    """
    Enhance an uploaded 8-bit RGB/RGBA PNG and return the result as PNG.

    Returns 400 for invalid options or unsupported images, 413 for
    oversized uploads.
    """
    try:
        options = AgcwdOptions.from_mapping({"alpha": alpha, "fusion": fusion})
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        # Check file size
        file.file.seek(0, 2)  # Seek to end
        size = file.file.tell()
        if size > MAX_UPLOAD_SIZE:
            raise HTTPException(
                status_code=413,
                detail=f"File too large (max {MAX_UPLOAD_SIZE/1e6:.0f}MB)"
            )
        file.file.seek(0)  # Reset to beginning

        with tempfile.TemporaryDirectory(prefix="agcwd_") as tmp_dir:
            input_path = os.path.join(tmp_dir, "input.png")
            output_path = os.path.join(tmp_dir, "enhanced.png")
            with open(input_path, "wb") as tmp:
                shutil.copyfileobj(file.file, tmp)

            try:
                image = load_png(input_path)
            except (ValueError, IOError) as e:
                raise HTTPException(status_code=400, detail=str(e))

            try:
                Agcwd(options).enhance_image(image.pixels)
            except (ValueError, TypeError) as e:
                raise HTTPException(status_code=400, detail=str(e))
            save_png(output_path, image)

            with open(output_path, "rb") as f:
                content = f.read()

        logger.info(
            f"Enhanced {file.filename} ({image.width}x{image.height} {image.color_type}, "
            f"alpha={options.alpha}, fusion={options.fusion})"
        )
        return Response(content=content, media_type="image/png")
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Enhancement failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/curve")
async def compute_curve(request: CurveRequest):
    """Compute the 8-bit AGCWD curve for a brightness histogram."""
    hist = np.asarray(request.histogram, dtype=np.int64)
    if hist.shape != (NUM_LEVELS,):
        raise HTTPException(
            status_code=400,
            detail=f"histogram must have {NUM_LEVELS} bins, got {hist.size}"
        )
    if (hist < 0).any():
        raise HTTPException(status_code=400, detail="histogram counts must be non-negative")

    try:
        curve = agcwd_curve(hist, request.alpha)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"alpha": request.alpha, "curve": curve_to_lut(curve).tolist()}


def main(argv: Optional[List[str]] = None):
    """Run the service with uvicorn."""
    ap = argparse.ArgumentParser(prog="agcwd-server", description="AGCWD HTTP service")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", default=8000, type=int)
    args = ap.parse_args(argv)

    setup_logger("agcwd")
    uvicorn.run("agcwd.server:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
