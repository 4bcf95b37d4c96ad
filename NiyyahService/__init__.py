"""
Niyyah activation service Django project.
"""
