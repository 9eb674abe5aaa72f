"""Interfaces (application boundary) for Lodestar.

Defines framework-free application contracts: repository ABCs, the unit of work,
and the errors adapters raise through them. Business rules stay out of this
package.

Dependency rule: may import `lodestar.domain` for entity types only. It may be
imported by `lodestar.service_layer`, `lodestar.adapters`, and
`lodestar.bootstrap`.
"""
