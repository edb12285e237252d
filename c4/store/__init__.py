"""Stores that read and write data by C4 ID: folder, memory and path-map backed, with validating and logging wrappers."""