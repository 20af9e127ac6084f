from __future__ import annotations

from ..schemas.envelope import ListEnvelope
from ..schemas.requests import CouponValidateRequest
from ..utils.datetime import epoch_millis
from .routing import RequestContext, RouteGroup
from .utils import domain_errors, found_or_error, parse_model

group = RouteGroup("reference")


@group.get("shipping")
async def list_shipping(context: RequestContext):
    return ListEnvelope(await context.backend.catalog.shipping(), alias="shipping")


@group.get("banners")
async def list_banners(context: RequestContext):
    return ListEnvelope(await context.backend.catalog.banners(), alias="banners")


@group.get("banners/active")
async def active_banners(context: RequestContext):
    position = context.query.get("position") or None
    items = await context.backend.catalog.banners(active_only=True, position=position)
    return ListEnvelope(items, alias="banners")


@group.get("banners/{banner_id:int}")
async def get_banner(context: RequestContext):
    banner = await context.backend.catalog.banner(context.params["banner_id"])
    return found_or_error(banner, "Banner not found")


@group.get("testimonials")
async def list_testimonials(context: RequestContext):
    return ListEnvelope(await context.backend.catalog.testimonials(), alias="testimonials")


@group.get("testimonials/active")
async def active_testimonials(context: RequestContext):
    items = await context.backend.catalog.testimonials(active_only=True)
    return ListEnvelope(items, alias="testimonials")


@group.get("testimonials/featured")
async def featured_testimonials(context: RequestContext):
    items = await context.backend.catalog.testimonials(featured_only=True)
    return ListEnvelope(items, alias="testimonials")


@group.get("testimonials/{testimonial_id:int}")
async def get_testimonial(context: RequestContext):
    testimonial = await context.backend.catalog.testimonial(context.params["testimonial_id"])
    return found_or_error(testimonial, "Testimonial not found")


@group.delete("testimonials/{testimonial_id}")
async def delete_testimonial(context: RequestContext):
    # seed data is read-only; the delete is acknowledged only
    testimonial_id = context.params["testimonial_id"]
    return {"success": True, "message": f"Testimonial {testimonial_id} deleted successfully (mock)"}


@group.get("clients")
async def list_clients(context: RequestContext):
    return ListEnvelope(await context.backend.catalog.clients(), alias="clients")


@group.get("clients/active")
async def active_clients(context: RequestContext):
    return ListEnvelope(await context.backend.catalog.clients(active_only=True), alias="clients")


@group.get("clients/featured")
async def featured_clients(context: RequestContext):
    return ListEnvelope(await context.backend.catalog.clients(featured_only=True), alias="clients")


@group.get("clients/{client_id:int}")
async def get_client(context: RequestContext):
    client = await context.backend.catalog.client(context.params["client_id"])
    return found_or_error(client, "Client not found")


@group.delete("clients/{client_id}")
async def delete_client(context: RequestContext):
    client_id = context.params["client_id"]
    return {"success": True, "message": f"Client {client_id} deleted successfully (mock)"}


@group.post("coupons/validate")
@domain_errors
async def validate_coupon(context: RequestContext):
    request = parse_model(CouponValidateRequest, context)
    return await context.backend.coupons.validate(request)


@group.post("checkout")
async def checkout(context: RequestContext):
    return {"success": True, "orderId": f"MOCK-{epoch_millis()}"}
