"""API routes."""

from fastapi import APIRouter

from dossier.api.v1 import admin, auth, credentials, documents, health, personnel, terminals, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/user", tags=["user"])
router.include_router(credentials.router, prefix="/credentials", tags=["credentials"])
router.include_router(documents.router, prefix="/documents", tags=["documents"])
router.include_router(terminals.router, prefix="/terminals", tags=["terminals"])
router.include_router(personnel.router, prefix="/personnel", tags=["personnel"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
