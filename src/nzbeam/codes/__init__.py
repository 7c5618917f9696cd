# Design code provisions
from .base_code import DesignCode
from .nzs3101 import NZS3101
