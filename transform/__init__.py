"""
Transformation pipeline stages.

- params: query string -> TransformConfig
- security: optional HMAC request signing
- cache_key: TransformConfig -> storage key
- geometry: resize dimensions per fit mode
- engine: decode -> resize -> crop -> composite -> encode
"""
