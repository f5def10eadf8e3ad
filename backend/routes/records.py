"""Saved run endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from backend import storage
from backend.host import EngineHost

from .deps import get_host

router = APIRouter()


@router.get("/records")
def list_records(host: EngineHost = Depends(get_host)):
    """List saved runs of the loaded project."""
    title = host.info().title
    return [
        {"index": index, **record.model_dump(mode="json")}
        for index, record in storage.list_records(title)
    ]


@router.post("/records", status_code=201)
def save_record(host: EngineHost = Depends(get_host)):
    """Save the current run."""
    index, record = host.save_snapshot()
    return {"index": index, **record.model_dump(mode="json")}


@router.post("/records/{index}/load")
def load_record(index: int, host: EngineHost = Depends(get_host)):
    """Replace the current run with a saved one."""
    record = storage.get_record(host.info().title, index)
    if record is None:
        raise HTTPException(404, "Record not found")
    host.restore(record)
    return {"ok": True}


@router.delete("/records/{index}")
def delete_record(index: int, host: EngineHost = Depends(get_host)):
    """Delete a saved run."""
    if not storage.delete_record(host.info().title, index):
        raise HTTPException(404, "Record not found")
    return {"ok": True}
