from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session
import structlog

from bustrips.database import get_db
from bustrips.exceptions import TripNotFoundError, UnsupportedLanguageError
from bustrips.manifests.renderer import ManifestRenderer, manifest_filename
from bustrips.trips.service import TripService

logger = structlog.get_logger(__name__)

router = APIRouter()

def get_manifest_renderer(request: Request) -> ManifestRenderer:
    return ManifestRenderer(compress=request.app.state.settings.MANIFEST_COMPRESS)

@router.get("/{trip_id}/passengers/pdf")
def download_manifest(
    trip_id: str,
    language: str = Query("en", description="Manifest language (en/pt)"),
    db: Session = Depends(get_db),
    renderer: ManifestRenderer = Depends(get_manifest_renderer)
):
    """Download the passenger manifest of a trip as a PDF"""
    
    trip_service = TripService(db)
    
    try:
        trip = trip_service.get_trip(trip_id)
    except TripNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    
    # Render fully before any header is sent
    try:
        content = renderer.render(trip, trip.passengers, language=language)
    except UnsupportedLanguageError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.exception("request_failed", action="download_manifest", trip_id=trip_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate PDF: {str(e)}"
        )
    
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={manifest_filename(trip_id)}"}
    )
