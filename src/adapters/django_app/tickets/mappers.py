"""
Mappers para conversão entre Entities (Core) e Models (Django).

Responsabilidades:
- Converter Entity → Model (para persistência)
- Converter Model → Entity (para uso no Core)

Princípios:
- Mappers são stateless
- Não contêm lógica de negócio
- Tratam apenas conversão de dados
"""

from typing import Iterable, List

from src.core.tickets.entities import (
    AssignedTicketEntity,
    AssignmentStatus,
    TicketEntity,
)
from src.core.users.entities import UserEntity

from .models import AssignedTicketModel, TicketModel, UserModel


class UserMapper:
    """Mapper entre UserEntity e UserModel."""

    @staticmethod
    def to_model(entity: UserEntity) -> UserModel:
        """
        Converte UserEntity para UserModel.

        Note:
            Não chama .save() - deixa isso para o Repository
        """
        return UserModel(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            password_hash=entity.password_hash,
            avatar_url=entity.avatar_url,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def to_entity(model: UserModel) -> UserEntity:
        return UserEntity(
            id=model.id,
            name=model.name,
            email=model.email,
            password_hash=model.password_hash,
            avatar_url=model.avatar_url,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class TicketMapper:
    """
    Mapper para conversão entre TicketEntity e TicketModel.

    Responsável por:
    - to_model(): Entity → Model
    - to_entity(): Model → Entity
    - to_entity_list(): List[Model] → List[Entity]
    """

    @staticmethod
    def to_model(entity: TicketEntity) -> TicketModel:
        return TicketModel(
            id=entity.id,
            name=entity.name,
            description=entity.description,
            file_description=entity.file_description,
            creator_id=entity.creator_id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def to_entity(model: TicketModel) -> TicketEntity:
        """
        Converte TicketModel para TicketEntity.

        Note:
            Bypassa validações do factory method .create()
            pois dados já foram validados na criação original
        """
        return TicketEntity(
            id=model.id,
            name=model.name,
            description=model.description,
            file_description=model.file_description,
            creator_id=model.creator_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_entity_list(models: Iterable[TicketModel]) -> List[TicketEntity]:
        return [TicketMapper.to_entity(model) for model in models]


class AssignedTicketMapper:
    """Mapper entre AssignedTicketEntity e AssignedTicketModel."""

    @staticmethod
    def to_model(entity: AssignedTicketEntity) -> AssignedTicketModel:
        return AssignedTicketModel(
            id=entity.id,
            ticket_id=entity.ticket_id,
            assignee_id=entity.assignee_id,
            assigner_id=entity.assigner_id,
            status=entity.status.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def to_entity(model: AssignedTicketModel) -> AssignedTicketEntity:
        return AssignedTicketEntity(
            id=model.id,
            ticket_id=model.ticket_id,
            assignee_id=model.assignee_id,
            assigner_id=model.assigner_id,
            status=AssignmentStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
