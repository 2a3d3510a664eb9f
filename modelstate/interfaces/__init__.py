"""
Interfaces package: type aliases and the structural protocols a host type
may implement to take part in persistence.
"""
