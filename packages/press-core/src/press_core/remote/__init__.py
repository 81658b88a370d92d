from .client import SAMPLE_TYPES, HttpRemoteDataClient, RemoteDataClient, SampleType

__all__ = ["HttpRemoteDataClient", "RemoteDataClient", "SAMPLE_TYPES", "SampleType"]
