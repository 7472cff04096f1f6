from app.repositories.system.system import SystemReader, SystemWriter, group_config

__all__ = ["SystemReader", "SystemWriter", "group_config"]
