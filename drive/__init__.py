from drive.client import DriveClient, DriveFile
from drive.credentials import ServiceAccountCredentials

__all__ = ["DriveClient", "DriveFile", "ServiceAccountCredentials"]
