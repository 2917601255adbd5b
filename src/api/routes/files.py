import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import FileResponse

from src.api.dependencies import get_csv_storage
from src.scraping.exporter.csv_exporter import CsvStorage

log = structlog.get_logger()

router = APIRouter()
download_router = APIRouter()


@router.get("/files")
async def list_files(storage: CsvStorage = Depends(get_csv_storage)) -> dict[str, dict[str, list[str]]]:
    """List stored CSV files by domain and template."""
    try:
        return storage.list_files()
    except OSError as e:
        log.error("files_listing_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to retrieve files.")


@download_router.get("/download")
async def download(
    domain: str | None = Query(None),
    template: str | None = Query(None),
    file: str | None = Query(None),
    storage: CsvStorage = Depends(get_csv_storage),
) -> FileResponse:
    if not domain or not file:
        raise HTTPException(status_code=400, detail="Domain and file parameters are required.")

    path = storage.resolve(domain, template, file)
    if path is None:
        raise HTTPException(status_code=404, detail="File not found.")
    return FileResponse(path, media_type="text/csv", filename=path.name)
