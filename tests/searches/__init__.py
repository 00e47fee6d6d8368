"""Integration tests against a real Elasticsearch cluster.

These tests validate that compound queries compile to requests the cluster
accepts and that text matching and word-count ranges behave end to end.

They are skipped if:
- ES_HOSTS does not point at a reachable cluster
- The configured credentials are rejected

For local testing without a cluster, see the unit tests in parent directories.
"""
