from fastapi import APIRouter, Depends, HTTPException

from src.api.dependencies import get_config_store
from src.models.api import AddConfigRequest, DomainsResponse, GetConfigRequest, MessageResponse, TemplatesResponse
from src.storage.config_store import ConfigStore

router = APIRouter()


@router.post("/addConfig", response_model=MessageResponse)
async def add_config(body: AddConfigRequest, store: ConfigStore = Depends(get_config_store)) -> MessageResponse:
    if not body.domain or not body.templates:
        raise HTTPException(status_code=400, detail="Domain and templates are required.")

    domain = store.save(body.domain, body.templates)
    return MessageResponse(message=f"Configuration for {domain} saved.")


@router.post("/getConfig", response_model=TemplatesResponse)
async def get_config(body: GetConfigRequest, store: ConfigStore = Depends(get_config_store)) -> TemplatesResponse:
    if not body.domain:
        raise HTTPException(status_code=400, detail="Domain is required.")
    if not store.exists():
        raise HTTPException(status_code=404, detail="No configurations found.")

    templates = store.get(body.domain)
    if templates is None:
        raise HTTPException(status_code=404, detail="Configuration not found for the specified domain.")
    return TemplatesResponse(templates=templates)


@router.get("/getDomains", response_model=DomainsResponse)
async def get_domains(store: ConfigStore = Depends(get_config_store)) -> DomainsResponse:
    if not store.exists():
        raise HTTPException(status_code=404, detail="No configurations found.")
    return DomainsResponse(domains=store.domains())
