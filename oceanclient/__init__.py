"""Client library for a cloud provider's v2 REST API: regions, sizes, snapshots, load balancers, VPCs, projects and block storage."""

__version__ = "0.1.0"