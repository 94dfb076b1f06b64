"""
Registry API: read-only JSON HTTP front end over a company-registry dataset.

Looks up companies by CNPJ, exposes the dataset's last-updated marker, runs
paginated searches and answers liveness probes. Storage is pluggable through
the port in registry_api.storage.
"""

__version__ = "0.1.0"
