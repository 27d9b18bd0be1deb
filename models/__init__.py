from .diagnostics import CheckEngineStatus, FaultRecord, FaultsInfo

__all__ = ["FaultRecord", "CheckEngineStatus", "FaultsInfo"]
