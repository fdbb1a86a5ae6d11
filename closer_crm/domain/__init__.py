"""Domain packages: schemas -> repository -> service -> router"""
