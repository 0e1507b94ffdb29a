"""Disk compatibility matrix lookups and input validation checks."""