"""
Instance License Service Django project.
"""
