from .dataset_name import DatasetName

__all__ = ['DatasetName']
