import logging
from sqlalchemy.orm import Session
from typing import List, Optional
from src.models import ServiceProvider
from src.providers.schemas import ServiceProviderCreate, ServiceProviderUpdate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "type")

class ServiceProviderService:
    @staticmethod
    def create_provider(db: Session, data: ServiceProviderCreate) -> ServiceProvider:
        provider_data = data.dict()
        provider_data["type"] = data.type.value
        provider = ServiceProvider(**provider_data)
        db.add(provider)
        db.commit()
        db.refresh(provider)
        logger.info("Created service provider %s", provider.id)
        return provider

    @staticmethod
    def get_providers(db: Session) -> List[ServiceProvider]:
        return db.query(ServiceProvider).order_by(ServiceProvider.name).all()

    @staticmethod
    def get_provider_by_id(db: Session, provider_id: str) -> Optional[ServiceProvider]:
        return db.query(ServiceProvider).filter(ServiceProvider.id == provider_id).first()

    @staticmethod
    def update_provider(db: Session, provider_id: str, update: ServiceProviderUpdate) -> Optional[ServiceProvider]:
        """Apply the fields present in ``update``; returns None when the provider does not exist"""
        provider = ServiceProviderService.get_provider_by_id(db, provider_id)
        if not provider:
            return None

        update_data = update.dict(exclude_unset=True)
        if update.type is not None:
            update_data["type"] = update.type.value

        for field, value in update_data.items():
            if value is None and field in REQUIRED_FIELDS:
                continue
            setattr(provider, field, value)

        db.commit()
        db.refresh(provider)
        return provider

    @staticmethod
    def delete_provider(db: Session, provider_id: str) -> bool:
        provider = ServiceProviderService.get_provider_by_id(db, provider_id)
        if not provider:
            return False
        db.delete(provider)
        db.commit()
        logger.info("Deleted service provider %s", provider_id)
        return True
