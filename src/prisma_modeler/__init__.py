"""prisma-modeler: relational model designer that emits Prisma schema documents."""

__version__ = "0.1.0"
