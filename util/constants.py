class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    ASK = V1 + "/ask"
    HEALTHZ = "/healthz"


class ExternalURIs:
    EMBEDDINGS = "/embeddings"
    CHAT_COMPLETIONS = "/chat/completions"
