"""Descrição declarativa do nó (schema de UI consumido pelo host).

Dados puros: o host renderiza os campos e o nó usa apenas os ``default``
declarados aqui quando um parâmetro não foi preenchido.
"""

from __future__ import annotations

from typing import Any

from evolution_node.domain.enums import Operation, Resource

# Tipo de credencial já usado pelos workflows existentes
CREDENTIALS_NAME = "httpbinApi"

_CREATE_OPS = [Operation.CREATE_BASIC, Operation.CREATE_PROXY]
_INSTANCE_OPS = [
    Operation.FETCH_INSTANCE,
    Operation.CONNECT,
    Operation.RESTART,
    Operation.LOGOUT,
    Operation.DELETE,
    Operation.SETTINGS,
]
_MESSAGE_OPS = [
    Operation.SEND_TEXT,
    Operation.SEND_IMAGE,
    Operation.SEND_VIDEO,
    Operation.SEND_AUDIO,
    Operation.SEND_DOCUMENT,
    Operation.SEND_POLL,
    Operation.SEND_LIST,
    Operation.SEND_STORIES,
]
_MEDIA_OPS = [
    Operation.SEND_IMAGE,
    Operation.SEND_VIDEO,
    Operation.SEND_AUDIO,
    Operation.SEND_DOCUMENT,
]
_CREATE_AND_SETTINGS_OPS = _CREATE_OPS + [Operation.SETTINGS]
_NAMED_OPS = _CREATE_OPS + _INSTANCE_OPS + _MESSAGE_OPS
_RECIPIENT_OPS = [op for op in _MESSAGE_OPS if op != Operation.SEND_STORIES]
_FILE_OPS = [Operation.SEND_IMAGE, Operation.SEND_VIDEO, Operation.SEND_DOCUMENT]


def _field(
    name: str,
    display_name: str,
    type_: str,
    default: Any,
    operations: list[Operation],
    **extra: Any,
) -> dict[str, Any]:
    """Declara um campo visível apenas para as operações informadas."""
    field: dict[str, Any] = {
        "displayName": display_name,
        "name": name,
        "type": type_,
        "default": default,
        "displayOptions": {"show": {"operation": [op.value for op in operations]}},
    }
    field.update(extra)
    return field


def _option(name: str, value: str) -> dict[str, str]:
    return {"name": name, "value": value}


RESOURCE_PROPERTY: dict[str, Any] = {
    "displayName": "Resource",
    "name": "resource",
    "type": "options",
    "noDataExpression": True,
    "options": [
        _option("Instancias", Resource.INSTANCES.value),
        _option("Mensagens", Resource.MESSAGES.value),
    ],
    "default": Resource.INSTANCES.value,
}

OPERATION_PROPERTIES: list[dict[str, Any]] = [
    {
        "displayName": "Operation",
        "name": "operation",
        "type": "options",
        "noDataExpression": True,
        "displayOptions": {"show": {"resource": [Resource.INSTANCES.value]}},
        "options": [
            _option("Criar instancia basica", Operation.CREATE_BASIC.value),
            _option("Criar instancia com proxy", Operation.CREATE_PROXY.value),
            _option("Listar instancias", Operation.FETCH_INSTANCES.value),
            _option("Buscar instancia", Operation.FETCH_INSTANCE.value),
            _option("Conectar instancia", Operation.CONNECT.value),
            _option("Reiniciar instancia", Operation.RESTART.value),
            _option("Desconectar instancia", Operation.LOGOUT.value),
            _option("Deletar instancia", Operation.DELETE.value),
            _option("Configurar instancia", Operation.SETTINGS.value),
        ],
        "default": Operation.CREATE_BASIC.value,
    },
    {
        "displayName": "Operation",
        "name": "operation",
        "type": "options",
        "noDataExpression": True,
        "displayOptions": {"show": {"resource": [Resource.MESSAGES.value]}},
        "options": [
            _option("Enviar texto", Operation.SEND_TEXT.value),
            _option("Enviar imagem", Operation.SEND_IMAGE.value),
            _option("Enviar video", Operation.SEND_VIDEO.value),
            _option("Enviar audio", Operation.SEND_AUDIO.value),
            _option("Enviar documento", Operation.SEND_DOCUMENT.value),
            _option("Enviar enquete", Operation.SEND_POLL.value),
            _option("Enviar lista", Operation.SEND_LIST.value),
            _option("Enviar status", Operation.SEND_STORIES.value),
        ],
        "default": Operation.SEND_TEXT.value,
    },
]

INSTANCE_FIELDS: list[dict[str, Any]] = [
    _field("instanceName", "Nome da instancia", "string", "", _NAMED_OPS),
    _field("instanceId", "ID da instancia", "string", "", [Operation.FETCH_INSTANCE]),
    _field("token", "Token", "string", "", _CREATE_OPS),
    _field("number", "Numero", "string", "", _CREATE_OPS),
    _field("qrcode", "Gerar QR Code", "boolean", False, _CREATE_OPS),
    # Comportamento (também usados por instanceSettings)
    _field("rejectCall", "Rejeitar chamadas", "boolean", False, _CREATE_AND_SETTINGS_OPS),
    _field("msgCall", "Mensagem ao rejeitar", "string", "", _CREATE_AND_SETTINGS_OPS),
    _field("groupsIgnore", "Ignorar grupos", "boolean", False, _CREATE_AND_SETTINGS_OPS),
    _field("alwaysOnline", "Sempre online", "boolean", False, _CREATE_AND_SETTINGS_OPS),
    _field("readMessages", "Ler mensagens", "boolean", False, _CREATE_AND_SETTINGS_OPS),
    _field("readStatus", "Ler status", "boolean", False, _CREATE_AND_SETTINGS_OPS),
    _field("syncFullHistory", "Sincronizar historico", "boolean", False, _CREATE_AND_SETTINGS_OPS),
    # Proxy
    _field("proxyHost", "Proxy host", "string", "", [Operation.CREATE_PROXY]),
    _field("proxyPort", "Proxy porta", "string", "", [Operation.CREATE_PROXY]),
    _field(
        "proxyProtocol",
        "Proxy protocolo",
        "options",
        "",
        [Operation.CREATE_PROXY],
        options=[_option("HTTP", "http"), _option("HTTPS", "https"), _option("SOCKS5", "socks5")],
    ),
    _field("proxyUsername", "Proxy usuario", "string", "", [Operation.CREATE_PROXY]),
    _field(
        "proxyPassword",
        "Proxy senha",
        "string",
        "",
        [Operation.CREATE_PROXY],
        typeOptions={"password": True},
    ),
    # Chatwoot
    _field("chatwootAccountId", "Chatwoot account ID", "string", "", _CREATE_OPS),
    _field(
        "chatwootToken", "Chatwoot token", "string", "", _CREATE_OPS, typeOptions={"password": True}
    ),
    _field("chatwootUrl", "Chatwoot URL", "string", "", _CREATE_OPS),
    _field("chatwootSignMsg", "Assinar mensagens", "boolean", False, _CREATE_OPS),
    _field("chatwootReopenConversation", "Reabrir conversa", "boolean", False, _CREATE_OPS),
    _field("chatwootConversationPending", "Conversa pendente", "boolean", False, _CREATE_OPS),
    _field("chatwootImportContacts", "Importar contatos", "boolean", False, _CREATE_OPS),
    _field("chatwootNameInbox", "Nome da inbox", "string", "", _CREATE_OPS),
    _field("chatwootMergeBrazilContacts", "Mesclar contatos BR", "boolean", False, _CREATE_OPS),
    _field("chatwootImportMessages", "Importar mensagens", "boolean", False, _CREATE_OPS),
    _field("chatwootDaysLimitImportMessages", "Dias de mensagens", "number", 0, _CREATE_OPS),
    _field("chatwootOrganization", "Organizacao", "string", "", _CREATE_OPS),
    _field("chatwootLogo", "Logo", "string", "", _CREATE_OPS),
    # Typebot
    _field("typebotUrl", "Typebot URL", "string", "", _CREATE_OPS),
    _field("typebot", "Typebot", "string", "", _CREATE_OPS),
    _field("typebotExpire", "Expiracao (min)", "number", 0, _CREATE_OPS),
    _field("typebotKeywordFinish", "Palavra de encerramento", "string", "", _CREATE_OPS),
    _field("typebotDelayMessage", "Delay (ms)", "number", 0, _CREATE_OPS),
    _field("typebotUnknownMessage", "Mensagem desconhecida", "string", "", _CREATE_OPS),
    _field("typebotListeningFromMe", "Escutar mensagens proprias", "boolean", False, _CREATE_OPS),
]

MESSAGE_FIELDS: list[dict[str, Any]] = [
    _field("remoteJid", "Numero do destinatario", "string", "", _RECIPIENT_OPS),
    _field("messageText", "Mensagem", "string", "", [Operation.SEND_TEXT]),
    _field(
        "mentionsEveryOne",
        "Mencionar todos",
        "boolean",
        False,
        [Operation.SEND_TEXT, Operation.SEND_POLL] + _MEDIA_OPS,
    ),
    _field("media", "Midia (URL ou base64)", "string", "", _MEDIA_OPS),
    _field("mimetype", "Mimetype", "string", "", [Operation.SEND_IMAGE, Operation.SEND_VIDEO]),
    _field(
        "caption",
        "Legenda",
        "string",
        "",
        _FILE_OPS + [Operation.SEND_STORIES],
    ),
    _field("fileName", "Nome do arquivo", "string", "", _FILE_OPS),
    # Enquete
    _field("pollName", "Titulo da enquete", "string", "", [Operation.SEND_POLL]),
    _field(
        "pollOptions",
        "Opcoes",
        "fixedCollection",
        {},
        [Operation.SEND_POLL],
        typeOptions={"multipleValues": True},
        options=[
            {
                "displayName": "Opcao",
                "name": "metadataValues",
                "values": [
                    {"displayName": "Valor", "name": "optionValue", "type": "string", "default": ""}
                ],
            }
        ],
    ),
    # Lista
    _field("listTitle", "Titulo da lista", "string", "", [Operation.SEND_LIST]),
    _field("listDescription", "Descricao da lista", "string", "", [Operation.SEND_LIST]),
    _field("footerText", "Rodape", "string", "", [Operation.SEND_LIST]),
    _field("buttonText", "Texto do botao", "string", "", [Operation.SEND_LIST]),
    _field("sectionTitle", "Titulo da secao", "string", "", [Operation.SEND_LIST]),
    _field(
        "listRows",
        "Linhas",
        "fixedCollection",
        {},
        [Operation.SEND_LIST],
        typeOptions={"multipleValues": True},
        options=[
            {
                "displayName": "Linha",
                "name": "rowValues",
                "values": [
                    {"displayName": "Titulo", "name": "rowTitle", "type": "string", "default": ""},
                    {
                        "displayName": "Descricao",
                        "name": "rowDescription",
                        "type": "string",
                        "default": "",
                    },
                    {"displayName": "ID", "name": "rowId", "type": "string", "default": ""},
                ],
            }
        ],
    ),
    # Status
    _field(
        "statusType",
        "Tipo de status",
        "options",
        "text",
        [Operation.SEND_STORIES],
        options=[
            _option("Texto", "text"),
            _option("Imagem", "image"),
            _option("Video", "video"),
            _option("Audio", "audio"),
        ],
    ),
    _field("content", "Conteudo", "string", "", [Operation.SEND_STORIES]),
    _field("backgroundColor", "Cor de fundo", "color", "#000000", [Operation.SEND_STORIES]),
    _field("font", "Fonte", "number", 1, [Operation.SEND_STORIES]),
]

NODE_DESCRIPTION: dict[str, Any] = {
    "displayName": "Evolution API",
    "name": "evolutionApi",
    "icon": "file:evolutionapi.svg",
    "group": ["transform"],
    "version": 1,
    "subtitle": '={{$parameter["operation"] + ": " + $parameter["resource"]}}',
    "description": "Interact with Evolution API",
    "defaults": {"name": "Evolution API"},
    "inputs": ["main"],
    "outputs": ["main"],
    "credentials": [{"name": CREDENTIALS_NAME, "required": True}],
    "requestDefaults": {
        "headers": {"Accept": "application/json", "Content-Type": "application/json"},
    },
    "properties": [RESOURCE_PROPERTY, *OPERATION_PROPERTIES, *INSTANCE_FIELDS, *MESSAGE_FIELDS],
}


def _collect_defaults() -> dict[str, Any]:
    defaults: dict[str, Any] = {}
    for prop in NODE_DESCRIPTION["properties"]:
        defaults.setdefault(prop["name"], prop.get("default"))
    return defaults


PARAMETER_DEFAULTS: dict[str, Any] = _collect_defaults()


def get_parameter_default(name: str) -> Any:
    """Retorna o default declarado de um parâmetro (suporta nomes com ponto)."""
    root, _, rest = name.partition(".")
    value = PARAMETER_DEFAULTS.get(root)
    for part in rest.split(".") if rest else []:
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value
