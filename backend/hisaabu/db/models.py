from hisaabu.company.models import Company, Sequence  # noqa: F401
from hisaabu.auth.models import User  # noqa: F401
from hisaabu.platform_admin.models import PlatformAdmin  # noqa: F401
from hisaabu.customers.models import Customer  # noqa: F401
from hisaabu.products.models import Product  # noqa: F401
