"""FastAPI dependencies for the chat, agent console and catalog services."""

from typing import Annotated

from fastapi import Depends

from app.services.catalog.service import CatalogService, get_catalog_service
from app.services.chat.service import ChatService, get_chat_service, get_fallback_store
from supportbot.core.feedback import FallbackStore

# Type aliases for convenience
ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]
FallbackStoreDep = Annotated[FallbackStore, Depends(get_fallback_store)]
CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
