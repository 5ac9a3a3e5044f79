"""File text extraction routes."""

import logging

from fastapi import APIRouter, File, HTTPException, UploadFile

from chatagent.schemas.chat import ExtractedText
from chatagent.services.pdf_parser import UnsupportedFileType, extract_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["files"])


@router.post("/extract-text", response_model=ExtractedText)
async def extract_file_text(file: UploadFile = File(...)):
    """Extract the text of an uploaded PDF or text file."""
    content = await file.read()
    filename = file.filename or ""

    try:
        text = extract_text(filename, content)
    except UnsupportedFileType:
        raise HTTPException(
            status_code=400,
            detail="Unsupported file type. Only PDF and text files are supported.",
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Extracted {len(text)} characters from {filename}")
    return ExtractedText(filename=filename, text=text)
