"""Templates de gerenciamento de instâncias."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

from evolution_node.node.models import Credentials, OperationKey, RequestDescriptor
from evolution_node.node.parameters import ParameterReader
from evolution_node.node.projections import project_instance_options
from evolution_node.node.templates.base import (
    PassThroughProjection,
    build_descriptor,
    build_url,
    include_if_truthy,
)

# Literal de integração enviado em toda criação de instância
DEFAULT_INTEGRATION = "WHATSAPP-BAILEYS"

BEHAVIOR_FIELDS: tuple[str, ...] = (
    "number",
    "qrcode",
    "rejectCall",
    "msgCall",
    "groupsIgnore",
    "alwaysOnline",
    "readMessages",
    "readStatus",
    "syncFullHistory",
)

CHATWOOT_FIELDS: tuple[str, ...] = (
    "chatwootAccountId",
    "chatwootToken",
    "chatwootUrl",
    "chatwootSignMsg",
    "chatwootReopenConversation",
    "chatwootConversationPending",
    "chatwootImportContacts",
    "chatwootNameInbox",
    "chatwootMergeBrazilContacts",
    "chatwootImportMessages",
    "chatwootDaysLimitImportMessages",
    "chatwootOrganization",
    "chatwootLogo",
)

TYPEBOT_FIELDS: tuple[str, ...] = (
    "typebotUrl",
    "typebot",
    "typebotExpire",
    "typebotKeywordFinish",
    "typebotDelayMessage",
    "typebotUnknownMessage",
    "typebotListeningFromMe",
)

# Chave dentro de ``proxy`` -> parâmetro do nó
PROXY_FIELDS: dict[str, str] = {
    "host": "proxyHost",
    "port": "proxyPort",
    "protocol": "proxyProtocol",
    "username": "proxyUsername",
    "password": "proxyPassword",
}

# Enviados sempre, inclusive quando falsy
SETTINGS_FIELDS: tuple[str, ...] = (
    "rejectCall",
    "msgCall",
    "groupsIgnore",
    "alwaysOnline",
    "readMessages",
    "readStatus",
    "syncFullHistory",
)


class InstanceActionTemplate(PassThroughProjection):
    """Ação sem body sobre uma instância: ``{method} /instance/{action}/{name}``."""

    def __init__(self, method: str, action: str) -> None:
        self.method = method
        self.action = action

    def build(self, params: ParameterReader, credentials: Credentials) -> RequestDescriptor:
        instance_name = params.get("instanceName")
        url = build_url(credentials, "instance", self.action, instance_name)
        return build_descriptor(self.method, url, credentials)


class FetchInstancesTemplate:
    """Lista instâncias como opções ``{name, value}``."""

    def build(self, params: ParameterReader, credentials: Credentials) -> RequestDescriptor:
        url = build_url(credentials, "instance", "fetchInstances")
        return build_descriptor("GET", url, credentials)

    def project(self, response: Any, key: OperationKey) -> Any:
        return project_instance_options(response, key)


class FetchInstanceTemplate(PassThroughProjection):
    """Busca instâncias com filtro opcional por nome ou id na query string."""

    def build(self, params: ParameterReader, credentials: Credentials) -> RequestDescriptor:
        url = build_url(credentials, "instance", "fetchInstances")

        instance_name = params.get("instanceName")
        if instance_name:
            url = f"{url}?{urlencode({'instanceName': instance_name})}"
        else:
            instance_id = params.get("instanceId")
            if instance_id:
                url = f"{url}?{urlencode({'instanceId': instance_id})}"

        return build_descriptor("GET", url, credentials)


class CreateInstanceTemplate(PassThroughProjection):
    """Criação de instância (básica ou com proxy).

    Campos opcionais entram no body somente quando truthy. Na variante com
    proxy, os campos de proxy vão aninhados em ``proxy`` e o objeto só é
    enviado se ao menos um deles for truthy.
    """

    def __init__(self, with_proxy: bool = False) -> None:
        self.with_proxy = with_proxy

    def build(self, params: ParameterReader, credentials: Credentials) -> RequestDescriptor:
        body: dict[str, Any] = {
            "instanceName": params.get("instanceName"),
            "token": params.get("token") or "",
            "integration": DEFAULT_INTEGRATION,
        }
        body.update(include_if_truthy(params, BEHAVIOR_FIELDS + CHATWOOT_FIELDS + TYPEBOT_FIELDS))
        if self.with_proxy:
            proxy = include_if_truthy(params, PROXY_FIELDS)
            if proxy:
                body["proxy"] = proxy

        url = build_url(credentials, "instance", "create")
        return build_descriptor("POST", url, credentials, body=body)


class InstanceSettingsTemplate(PassThroughProjection):
    """Atualização de settings: os sete campos vão sempre, sem filtro."""

    def build(self, params: ParameterReader, credentials: Credentials) -> RequestDescriptor:
        body = {field: params.get(field) for field in SETTINGS_FIELDS}
        url = build_url(credentials, "settings", "set", params.get("instanceName"))
        return build_descriptor("POST", url, credentials, body=body)
