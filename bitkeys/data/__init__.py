"""
All methods for manipulating and representing data in BitKeys
"""
# data/__init__.py
from bitkeys.data.data_handling import *
from bitkeys.data.encoding import *
from bitkeys.data.networks import *
