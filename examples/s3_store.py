"""Caching entities stored in S3.

Entities are JSON objects under a bucket prefix. Credentials come from the
usual boto3 sources (environment, profile, or instance role).
"""

from pathlib import Path

from repochain import (
    ChainSpec,
    DecoratorSpec,
    FileCache,
    S3Store,
    build_repository,
    configure_logging,
)


# Show cache hits and misses on stderr
configure_logging(verbose=True)

repository = build_repository(
    ChainSpec(
        base="store",
        store=S3Store("s3://my-bucket/entities/products"),
        decorators=[
            DecoratorSpec(
                "cache",
                # A prefix lets several chains share one cache directory
                {"cache": FileCache(Path("./data/cache")), "key_prefix": "products"},
            ),
        ],
    )
)

product = repository.get("sku-1042")
print(product.to_dict())
