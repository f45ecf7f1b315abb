#!/usr/bin/env python3
"""
FastAPI server for stamping page numbers onto uploaded PDFs
"""

import logging
from typing import Optional

from fastapi import FastAPI, File, Form, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

import config
from error_handling import ErrorHandler, ProcessingError, ResourceError, ValidationError
from numbering_settings import FontSettings, NumberingSettings, PositionSettings
from pdf_document import SourceDocument
from stamping_engine import PageNumberStamper

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def create_app() -> FastAPI:
    """Build the FastAPI application"""
    app = FastAPI(
        title=f"{config.SERVICE_NAME} API",
        description="Stamp page numbers onto PDF documents",
        version=config.VERSION,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    error_handler = ErrorHandler(logger=logger)
    stamper = PageNumberStamper(log_callback=logger.info)

    @app.get("/api/health")
    async def health():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": config.SERVICE_NAME,
            "version": config.VERSION,
        }

    @app.post("/api/stamp")
    async def stamp_pdf(
        file: Optional[UploadFile] = File(None),
        visible_from_page: int = Form(config.DEFAULT_VISIBLE_FROM_PAGE),
        start_number: int = Form(config.DEFAULT_START_NUMBER),
        custom_range: bool = Form(False),
        range_from: int = Form(config.DEFAULT_RANGE_FROM),
        range_to: Optional[int] = Form(None),
        skip_pattern: str = Form(""),
        preset: str = Form(config.DEFAULT_POSITION_PRESET),
        custom_x: float = Form(config.DEFAULT_CUSTOM_X),
        custom_y: float = Form(config.DEFAULT_CUSTOM_Y),
        units: str = Form(config.DEFAULT_UNITS),
        gutter_margin: float = Form(config.DEFAULT_GUTTER_MARGIN),
        mirrored_gutter: bool = Form(False),
        font_family: str = Form(config.DEFAULT_FONT_FAMILY),
        font_size: float = Form(config.DEFAULT_FONT_SIZE),
        font_color: str = Form(config.DEFAULT_FONT_COLOR),
        font_opacity: float = Form(config.DEFAULT_FONT_OPACITY),
    ):
        """
        Add page numbers to an uploaded PDF

        Every setting is optional; omitted ones take the session defaults.
        """
        if file is None:
            return _error(400, "No file uploaded")

        data = await file.read(config.MAX_UPLOAD_BYTES + 1)
        try:
            error_handler.validate_upload_size(len(data))
        except ResourceError as e:
            logger.warning(f"Rejected upload {file.filename}: {e}")
            return _error(413, str(e))

        try:
            document = SourceDocument.from_bytes(data, file.filename or "document.pdf", error_handler)
        except ValidationError as e:
            logger.error(f"Could not load {file.filename}: {e}")
            return _error(500, f"Failed to process PDF: {e}")

        numbering = NumberingSettings(
            visible_from_page=visible_from_page,
            start_number=start_number,
            custom_range=custom_range,
            range_from=range_from,
            range_to=document.page_count if range_to is None else range_to,
            skip_pattern=skip_pattern,
        )
        position = PositionSettings(
            preset=preset,
            custom_x=custom_x,
            custom_y=custom_y,
            units=units,
            gutter_margin=gutter_margin,
            mirrored_gutter=mirrored_gutter,
        )
        font = FontSettings(family=font_family, size=font_size, color=font_color, opacity=font_opacity)

        try:
            result = await run_in_threadpool(stamper.stamp_document, document, numbering, position, font)
        except ProcessingError as e:
            logger.error(f"Stamping error: {e}")
            return _error(500, "Failed to process PDF")

        return Response(
            content=result,
            media_type=config.PDF_CONTENT_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{document.output_name}"'},
        )

    return app


app = create_app()
