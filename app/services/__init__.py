# app/services - Business logic layer
from .structure_service import StructureService
from .export_service import ExportService

__all__ = ['StructureService', 'ExportService']
