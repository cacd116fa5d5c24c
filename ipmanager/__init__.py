"""IP Inventory Manager.

An interactive command-line manager for network device records
(IP address, subnet, gateway, description, port) stored in a local JSON
file, with a per-record TCP liveness check.
"""

__version__ = "1.0.0"
