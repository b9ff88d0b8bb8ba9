"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from ...schemas.routing import (
    AnalysisRequest,
    AnalysisResponse,
    ComparisonResponse,
    OptimizationRequest,
    OptimizationResponse,
)
from ...services.routing.service import analyze_route, compare_route, export_route_csv, optimize_route

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/optimize", response_model=OptimizationResponse, status_code=status.HTTP_200_OK)
def optimize(payload: OptimizationRequest) -> OptimizationResponse:
    try:
        return optimize_route(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}"
        ) from exc


@router.post("/compare", response_model=ComparisonResponse, status_code=status.HTTP_200_OK)
def compare(payload: OptimizationRequest) -> ComparisonResponse:
    """Run every algorithm on the same stops and report savings against nearest neighbor."""
    try:
        return compare_route(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error comparing algorithms: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to compare algorithms: {str(exc)}"
        ) from exc


@router.post("/analyze", response_model=AnalysisResponse, status_code=status.HTTP_200_OK)
def analyze(payload: AnalysisRequest) -> AnalysisResponse:
    """Distance, duration and bounds of the stops in the order given, without optimizing."""
    try:
        return analyze_route(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error analyzing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to analyze route: {str(exc)}"
        ) from exc


@router.post("/export", response_class=PlainTextResponse, status_code=status.HTTP_200_OK)
def export(payload: OptimizationRequest) -> PlainTextResponse:
    """Optimize and return the sequenced stops as CSV."""
    try:
        content = export_route_csv(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error exporting route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to export route: {str(exc)}"
        ) from exc
    return PlainTextResponse(
        content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="optimized_route.csv"'},
    )
