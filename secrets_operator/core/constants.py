"""Core constants: cache key structure and coordination literals.

Single source of truth for client cache key layout and the annotation
keys/selector shared by every controller replica. Changing any of these
breaks compatibility with replicas running an older release.
"""

# Client cache key layout: <method>-<hash>[-<namespace scope>]
CACHE_KEY_SEP = "-"
# Kubernetes label values and object names are capped at 63 characters.
CACHE_KEY_MAX_LENGTH = 63
CACHE_KEY_HASH_LENGTH = 22
CACHE_KEY_MAX_METHOD_LENGTH = CACHE_KEY_MAX_LENGTH - len(CACHE_KEY_SEP) - CACHE_KEY_HASH_LENGTH

# Kubernetes object UIDs are RFC 4122 strings.
UID_LENGTH = 36

# Replica coordination
ANNOTATION_PRE_DELETE_HOOK_STARTED = "vso.secrets.hashicorp.com/pre-delete-hook-started"
ANNOTATION_IN_MEMORY_VAULT_TOKENS_REVOKED = (
    "vso.secrets.hashicorp.com/in-memory-vault-tokens-revoked"
)
LABEL_SELECTOR_CONTROL_PLANE = "control-plane=controller-manager"
PRE_DELETE_HOOK_PROBE_PATH = "/var/run/podinfo/pre-delete-hook-started"
STRING_TRUE = "true"
POLL_INTERVAL_SECONDS = 0.3
