from typing import Dict, Type, Any

from src.shared.database.base_mapper import BaseEntityMapper


class EntityMapper:
    """Routes domain models and database entities to the mapper registered for their type."""

    def __init__(self, entity_mappings: Dict[Type, BaseEntityMapper]):
        self.entity_mappings = entity_mappings
        self._entity_types: Dict[Type, BaseEntityMapper] = {
            mapper.entity_type: mapper for mapper in entity_mappings.values()
        }

    def map_to_entity(self, model_instance: Any):
        model_type = type(model_instance)
        if model_type in self.entity_mappings:
            return self.entity_mappings[model_type].to_entity(model_instance)
        else:
            raise ValueError(f"No entity mapping found for model type: {model_type}")

    def map_to_model(self, entity: Any):
        entity_type = type(entity)
        if entity_type in self._entity_types:
            return self._entity_types[entity_type].to_model(entity)
        else:
            raise ValueError(f"No model mapping found for entity type: {entity_type}")
