"""Templates de envio de mensagens (``/message/{endpoint}/{instance}``)."""

from __future__ import annotations

from typing import Any

from evolution_node.domain.enums import MediaType
from evolution_node.node.models import Credentials, RequestDescriptor
from evolution_node.node.parameters import ParameterReader
from evolution_node.node.templates.base import (
    PassThroughProjection,
    build_descriptor,
    build_url,
    collection_entries,
    include_if_truthy,
)


def _send(
    endpoint: str,
    params: ParameterReader,
    credentials: Credentials,
    body: dict[str, Any],
) -> RequestDescriptor:
    """POST em ``/message/{endpoint}/{instanceName}``."""
    url = build_url(credentials, "message", endpoint, params.get("instanceName"))
    return build_descriptor("POST", url, credentials, body=body)


class SendTextTemplate(PassThroughProjection):
    """Texto simples; ``mentionsEveryOne`` só vai quando truthy."""

    def build(self, params: ParameterReader, credentials: Credentials) -> RequestDescriptor:
        body: dict[str, Any] = {
            "number": params.get("remoteJid"),
            "text": params.get("messageText"),
        }
        body.update(include_if_truthy(params, ["mentionsEveryOne"]))
        return _send("sendText", params, credentials, body)


class SendMediaTemplate(PassThroughProjection):
    """Imagem ou vídeo via ``sendMedia``."""

    def __init__(self, mediatype: MediaType) -> None:
        self.mediatype = mediatype

    def build(self, params: ParameterReader, credentials: Credentials) -> RequestDescriptor:
        body = {
            "number": params.get("remoteJid"),
            "mediatype": self.mediatype.value,
            "media": params.get("media"),
            "mimetype": params.get("mimetype"),
            "caption": params.get("caption"),
            "fileName": params.get("fileName"),
            "mentionsEveryOne": bool(params.get("mentionsEveryOne")),
        }
        return _send("sendMedia", params, credentials, body)


class SendDocumentTemplate(PassThroughProjection):
    """Documento via ``sendMedia`` (sem mimetype)."""

    def build(self, params: ParameterReader, credentials: Credentials) -> RequestDescriptor:
        body = {
            "number": params.get("remoteJid"),
            "mediatype": MediaType.DOCUMENT.value,
            "media": params.get("media"),
            "caption": params.get("caption"),
            "fileName": params.get("fileName"),
            "mentionsEveryOne": bool(params.get("mentionsEveryOne")),
        }
        return _send("sendMedia", params, credentials, body)


class SendAudioTemplate(PassThroughProjection):
    """Áudio de voz via ``sendWhatsAppAudio``."""

    def build(self, params: ParameterReader, credentials: Credentials) -> RequestDescriptor:
        body = {
            "number": params.get("remoteJid"),
            "audio": params.get("media"),
            "mentionsEveryOne": bool(params.get("mentionsEveryOne")),
        }
        return _send("sendWhatsAppAudio", params, credentials, body)


class SendPollTemplate(PassThroughProjection):
    """Enquete; ``values`` vem de ``optionValue`` de cada opção repetível."""

    def build(self, params: ParameterReader, credentials: Credentials) -> RequestDescriptor:
        values = [
            entry.get("optionValue", "")
            for entry in collection_entries(params, "pollOptions.metadataValues")
        ]
        body = {
            "number": params.get("remoteJid"),
            "name": params.get("pollName"),
            "values": values,
            "selectableCount": len(values),
            "mentionsEveryOne": bool(params.get("mentionsEveryOne")),
        }
        return _send("sendPoll", params, credentials, body)


class SendListTemplate(PassThroughProjection):
    """Lista interativa com uma seção.

    ``sections[0].description`` recebe as descrições de cada linha (e não
    ``listDescription``); workflows existentes dependem desse formato.
    """

    def build(self, params: ParameterReader, credentials: Credentials) -> RequestDescriptor:
        rows = [
            {
                "title": entry.get("rowTitle", ""),
                "description": entry.get("rowDescription", ""),
                "rowId": entry.get("rowId", ""),
            }
            for entry in collection_entries(params, "listRows.rowValues")
        ]
        body = {
            "number": params.get("remoteJid"),
            "title": params.get("listTitle"),
            "description": params.get("listDescription"),
            "footerText": params.get("footerText"),
            "buttonText": params.get("buttonText"),
            "sections": [
                {
                    "title": params.get("sectionTitle"),
                    "description": [row["description"] for row in rows],
                    "rows": rows,
                }
            ],
        }
        return _send("sendList", params, credentials, body)


class SendStoriesTemplate(PassThroughProjection):
    """Status/story para todos os contatos."""

    def build(self, params: ParameterReader, credentials: Credentials) -> RequestDescriptor:
        body = {
            "type": params.get("statusType"),
            "content": params.get("content"),
            "caption": params.get("caption"),
            "backgroundColor": params.get("backgroundColor"),
            "font": params.get("font"),
            "allContacts": True,
        }
        return _send("sendStatus", params, credentials, body)
