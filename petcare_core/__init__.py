# =============================================================================
# petcare_core/__init__.py
# Data layer of the pet-care tracker
# =============================================================================
"""
Data layer of the pet-care tracker

Stores keep local collections of pets and care records in step with the
Supabase backend; analytics functions derive the views screens show.

Usage Example:
-------------
    from petcare_core.config import load_settings
    from petcare_core.data import SupabaseGateway, get_supabase_client
    from petcare_core.state import AuthStore, PetStore, CareRecordStore
    from petcare_core.analytics import age_label, partition_visits

    settings = load_settings()
    gateway = SupabaseGateway(get_supabase_client(settings))

    auth = AuthStore(gateway)
    auth.initialize()

    pets = PetStore(gateway, identity=auth.current_identity, bucket=settings.bucket)
    pets.load_pets()
"""

__version__ = "1.0.0"
