"""API routes for health, vault connection and scanning."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from ..connection import VaultConnection
from ..errors import NoVaultConnectedError, VaultError
from ..models import utc_timestamp
from ..vault import load_scan_cache, scan_vault


router = APIRouter(prefix="/api")


# === Request Models ===

class ConnectRequest(BaseModel):
    """连接请求模型，path 在路由内校验以返回约定的错误信息。"""

    path: Any = None


class ScanRequest(BaseModel):
    """扫描请求模型，缺省 path 时扫描已连接的 vault。"""

    path: Optional[str] = None


def get_connection(request: Request) -> VaultConnection:
    """Connection state owned by the running app"""
    return request.app.state.connection


# === Health Check ===

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "timestamp": utc_timestamp()}


# === Vault Connection ===

@router.post("/vault/connect")
def connect_vault(
    request: ConnectRequest | None = None,
    connection: VaultConnection = Depends(get_connection),
):
    """连接 vault 目录。"""
    path = request.path if request else None
    if not isinstance(path, str) or not path:
        raise HTTPException(status_code=400, detail="path is required")

    try:
        info = connection.connect(path)
    except VaultError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return info.to_dict()


@router.get("/vault/status")
def vault_status(connection: VaultConnection = Depends(get_connection)):
    """返回当前连接的 vault 信息。"""
    info = connection.status()
    return {"vault": info.to_dict() if info else None}


@router.post("/vault/disconnect")
def disconnect_vault(connection: VaultConnection = Depends(get_connection)):
    """断开当前 vault。"""
    connection.disconnect()
    return {"vault": None}


# === Scan ===

@router.post("/vault/scan")
def scan(
    request: ScanRequest | None = None,
    connection: VaultConnection = Depends(get_connection),
):
    """
    Scan a vault and rewrite its cache.

    Uses the body path when given, otherwise the connected vault. Filesystem
    failures during the walk surface as 500.
    """
    path = request.path if request else None
    try:
        if not path:
            info = connection.status()
            if info is None:
                raise NoVaultConnectedError()
            path = info.path
        result = scan_vault(path, connection.settings)
    except VaultError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return result.to_dict()


@router.get("/vault/scan")
def cached_scan(connection: VaultConnection = Depends(get_connection)):
    """读取已连接 vault 的扫描缓存。"""
    info = connection.status()
    if info is None:
        return {"scan": None}

    result = load_scan_cache(info.path, connection.settings)
    return {"scan": result.to_dict() if result else None}
