"""Constants shared by the cluster manifest assets."""

CLUSTER_MANIFEST_DIR = "cluster-manifests"
