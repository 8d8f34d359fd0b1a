"""SEO Meta Analyzer API – FastAPI app and endpoints."""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

import config
from analyzer import analyze_url
from presenter import render
from schemas import AnalyzeRequest, AnalyzeResponse
from scraper import FetchError, InvalidURLError

INVALID_URL_MESSAGE = "Please enter a valid URL"
ANALYSIS_FAILED_MESSAGE = "Unable to analyze the website. Please check the URL and try again."

config.configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SEO Meta Analyzer API",
    description="Meta tag extraction, SEO scoring and search/social previews",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=config.CORS_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.post("/analyze", response_model=AnalyzeResponse)
def analyze(body: AnalyzeRequest) -> AnalyzeResponse:
    """
    Pipeline: validate URL -> fetch page -> extract tags -> score -> render.
    """
    try:
        analysis = analyze_url(body.url)
    except InvalidURLError:
        raise HTTPException(status_code=400, detail=INVALID_URL_MESSAGE)
    except FetchError:
        logger.warning("Analysis failed for %s", body.url)
        raise HTTPException(status_code=502, detail=ANALYSIS_FAILED_MESSAGE)

    return AnalyzeResponse.from_analysis(analysis, render(analysis.report, analysis.tags, analysis.url))


@app.get("/health")
def health() -> dict:
    """Health check for deployment."""
    return {"status": "ok"}
