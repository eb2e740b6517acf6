"""Tabela ``OperationKey -> template``."""

from __future__ import annotations

from evolution_node.domain.enums import MediaType, Operation, Resource
from evolution_node.node.models import OperationKey
from evolution_node.node.templates.base import RequestTemplate
from evolution_node.node.templates.instances import (
    CreateInstanceTemplate,
    FetchInstancesTemplate,
    FetchInstanceTemplate,
    InstanceActionTemplate,
    InstanceSettingsTemplate,
)
from evolution_node.node.templates.messages import (
    SendAudioTemplate,
    SendDocumentTemplate,
    SendListTemplate,
    SendMediaTemplate,
    SendPollTemplate,
    SendStoriesTemplate,
    SendTextTemplate,
)

_INSTANCE_TEMPLATES: dict[Operation, RequestTemplate] = {
    Operation.CREATE_BASIC: CreateInstanceTemplate(),
    Operation.CREATE_PROXY: CreateInstanceTemplate(with_proxy=True),
    Operation.FETCH_INSTANCES: FetchInstancesTemplate(),
    Operation.FETCH_INSTANCE: FetchInstanceTemplate(),
    Operation.CONNECT: InstanceActionTemplate("GET", "connect"),
    Operation.RESTART: InstanceActionTemplate("POST", "restart"),
    Operation.LOGOUT: InstanceActionTemplate("DELETE", "logout"),
    Operation.DELETE: InstanceActionTemplate("DELETE", "delete"),
    Operation.SETTINGS: InstanceSettingsTemplate(),
}

_MESSAGE_TEMPLATES: dict[Operation, RequestTemplate] = {
    Operation.SEND_TEXT: SendTextTemplate(),
    Operation.SEND_IMAGE: SendMediaTemplate(MediaType.IMAGE),
    Operation.SEND_VIDEO: SendMediaTemplate(MediaType.VIDEO),
    Operation.SEND_AUDIO: SendAudioTemplate(),
    Operation.SEND_DOCUMENT: SendDocumentTemplate(),
    Operation.SEND_POLL: SendPollTemplate(),
    Operation.SEND_LIST: SendListTemplate(),
    Operation.SEND_STORIES: SendStoriesTemplate(),
}

TEMPLATES: dict[OperationKey, RequestTemplate] = {
    **{OperationKey(Resource.INSTANCES, op): t for op, t in _INSTANCE_TEMPLATES.items()},
    **{OperationKey(Resource.MESSAGES, op): t for op, t in _MESSAGE_TEMPLATES.items()},
}


def get_template(key: OperationKey) -> RequestTemplate | None:
    """Retorna o template da chave ou None se o par não existe."""
    return TEMPLATES.get(key)
