"""
DynaScale
^^^^^^^^^

Automatic provisioned throughput scaling for DynamoDB tables and
global secondary indexes.
"""
__author__ = 'DynaScale contributors'
__license__ = 'MIT'
__version__ = '0.1.0'
