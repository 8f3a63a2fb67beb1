# ==============================================
# Assessment Engine
# ==============================================
#
# Package Structure:
#
# assessment_engine/
# ├── normalization/    # Field codec + payload key normalization
# ├── analysis/         # Pattern classification & payload validation
# ├── transform/        # API <-> storage mappers, legacy schema adapter
# ├── storage/          # MySQL / MongoDB persistence collaborators
# ├── config.py         # Configuration management
# ├── exceptions.py     # Error hierarchy
# ├── assessment_service.py  # Facade tying everything together
# └── cli.py            # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
