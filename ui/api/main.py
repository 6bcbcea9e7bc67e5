"""FastAPI layer that exposes material upload and environment checks."""
from __future__ import annotations

import os
from datetime import datetime
from functools import lru_cache
from typing import Any

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile
from pydantic import BaseModel

from application.use_cases.check_environment import check_environment
from application.use_cases.upload_material import (
    EmptyExtractionError,
    MaterialNotFoundError,
    delete_material,
    get_material,
    list_materials,
    upload_material,
)
from domain.entities import ExtractionRequest, Material
from infrastructure.config import Container, build_default_container
from ui.logging_utils import setup_logging

app = FastAPI(title="Materials API")


@lru_cache(maxsize=1)
def get_container() -> Container:
    container = build_default_container()
    setup_logging(container.config.log_level, container.config.log_file)
    return container


class MaterialPayload(BaseModel):
    id: str
    title: str
    content: str
    file_type: str
    file_path: str | None = None
    metadata: dict[str, Any] = {}
    created_at: datetime | None = None

    @classmethod
    def from_material(cls, material: Material) -> "MaterialPayload":
        return cls(
            id=material.id,
            title=material.title,
            content=material.content,
            file_type=material.file_type,
            file_path=material.file_path,
            metadata=material.metadata,
            created_at=material.created_at,
        )


class VariablePayload(BaseModel):
    name: str
    defined: bool
    length: int
    preview: str
    padded: bool


class EnvCheckResponse(BaseModel):
    ok: bool
    defined: int
    total: int
    variables: list[VariablePayload]
    issues: list[str]


@app.get("/health")
def health_endpoint() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/materials/upload", response_model=MaterialPayload)
async def upload_endpoint(
    file: UploadFile | None = File(None),
    title: str | None = Form(None),
    container: Container = Depends(get_container),
) -> MaterialPayload:
    if file is None:
        raise HTTPException(status_code=400, detail="No file was uploaded")

    limit = container.config.max_upload_bytes
    buffer = await file.read(limit + 1)
    if len(buffer) > limit:
        raise HTTPException(status_code=413, detail=f"File exceeds the upload limit of {limit} bytes")

    request = ExtractionRequest(
        buffer=buffer,
        declared_type=file.content_type or "",
        filename=file.filename or "",
    )
    try:
        material = upload_material(
            request,
            title=title,
            extractor=container.extractor,
            repository=container.material_repository,
        )
    except EmptyExtractionError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return MaterialPayload.from_material(material)


@app.get("/materials", response_model=list[MaterialPayload])
def materials_endpoint(container: Container = Depends(get_container)) -> list[MaterialPayload]:
    return [MaterialPayload.from_material(m) for m in list_materials(container.material_repository)]


@app.get("/materials/{material_id}", response_model=MaterialPayload)
def material_endpoint(material_id: str, container: Container = Depends(get_container)) -> MaterialPayload:
    try:
        material = get_material(material_id, repository=container.material_repository)
    except MaterialNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return MaterialPayload.from_material(material)


@app.delete("/materials/{material_id}")
def delete_material_endpoint(material_id: str, container: Container = Depends(get_container)) -> dict[str, bool]:
    try:
        delete_material(material_id, repository=container.material_repository)
    except MaterialNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"deleted": True}


@app.get("/env-check", response_model=EnvCheckResponse)
def env_check_endpoint() -> EnvCheckResponse:
    report = check_environment(os.environ)
    return EnvCheckResponse(
        ok=report.ok,
        defined=report.defined,
        total=len(report.variables),
        variables=[
            VariablePayload(
                name=status.name,
                defined=status.defined,
                length=status.length,
                preview=status.preview,
                padded=status.padded,
            )
            for status in report.variables
        ],
        issues=report.issues,
    )
