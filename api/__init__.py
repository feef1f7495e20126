from api.mock_remote import MockRemoteAPI, load_catalog_data

__all__ = ["MockRemoteAPI", "load_catalog_data"]
