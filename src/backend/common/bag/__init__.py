"""Filesystem access and BagIt metadata reading for bag checks."""

from .bag_info import BagInfo, BagItMetadataReader
from .files import FileService
