__version__ = "0.1.0"

# Wire protocol version advertised in X-FaunaDB-API-Version
__api_version__ = "4"
