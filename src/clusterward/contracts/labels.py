"""Well-known label keys, values, and finalizer names."""

LABEL_KEY_MANAGED_BY = "clusterward.io/managed-by"
LABEL_KEY_COMPONENT = "clusterward.io/component"
LABEL_KEY_CLUSTER = "clusterward.io/cluster"
LABEL_KEY_INSTANCE = "clusterward.io/instance"

# Revision hash of the template an instance (or its pod) was rendered from
LABEL_KEY_INSTANCE_REVISION_HASH = "clusterward.io/instance-revision-hash"
LABEL_KEY_CONFIG_HASH = "clusterward.io/config-hash"

LABEL_VAL_MANAGED_BY_OPERATOR = "clusterward"

FINALIZER = "clusterward.io/finalizer"
