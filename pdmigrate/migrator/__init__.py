"""Disk and instance migration, discovery, snapshot cleanup and reporting."""