"""Enums de domínio: recursos e operações expostos pelo nó Evolution API."""

from __future__ import annotations

from enum import StrEnum


class Resource(StrEnum):
    """Recursos selecionáveis na UI do nó."""

    INSTANCES = "instances-api"
    MESSAGES = "messages-api"

    @classmethod
    def parse(cls, value: str) -> Resource:
        """Aceita o valor de wire (``instances-api``) ou o nome curto (``instances``).

        Raises:
            ValueError: Se o valor não corresponde a nenhum recurso
        """
        normalized = str(value or "").strip()
        for member in cls:
            if normalized in (member.value, member.value.removesuffix("-api")):
                return member
        raise ValueError(f"Recurso desconhecido: {value!r}")


class Operation(StrEnum):
    """Operações suportadas, agrupadas por recurso."""

    # Instâncias
    CREATE_BASIC = "instance-basic"
    CREATE_PROXY = "instance-proxy"
    FETCH_INSTANCES = "fetch-instances"
    FETCH_INSTANCE = "fetch-instance"
    CONNECT = "instance-connect"
    RESTART = "restart-instance"
    LOGOUT = "logout-instance"
    DELETE = "delete-instance"
    SETTINGS = "instanceSettings"

    # Mensagens
    SEND_TEXT = "sendText"
    SEND_IMAGE = "sendImage"
    SEND_VIDEO = "sendVideo"
    SEND_AUDIO = "sendAudio"
    SEND_DOCUMENT = "sendDocument"
    SEND_POLL = "sendPoll"
    SEND_LIST = "sendList"
    SEND_STORIES = "sendStories"


class MediaType(StrEnum):
    """Valores de ``mediatype`` aceitos por ``/message/sendMedia``."""

    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "document"
