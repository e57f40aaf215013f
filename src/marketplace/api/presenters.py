"""Render aggregates and read models as camelCase JSON payloads."""

import json


def _iso(value):
    return value.isoformat() if value else None


def _json(value, default=None):
    return json.loads(value) if value else default


def present_order(order) -> dict:
    pricing = order.pricing
    billing = order.billing_address
    shipping = order.shipping_address
    return {
        "id": str(order.id),
        "orderNumber": order.order_number,
        "customer": str(order.customer_id),
        "items": [
            {
                "id": str(item.id),
                "product": str(item.product_id),
                "artisan": str(item.artisan_id),
                "title": item.title,
                "image": item.image,
                "artisanName": item.artisan_name,
                "quantity": item.quantity,
                "price": item.unit_price,
                "customization": _json(item.customization),
            }
            for item in order.items
        ],
        "shippingAddress": {
            "name": shipping.name,
            "phone": shipping.phone,
            "street": shipping.street,
            "city": shipping.city,
            "state": shipping.state,
            "zipCode": shipping.zip_code,
            "country": shipping.country,
            "landmark": shipping.landmark,
        },
        "billingAddress": {
            "sameAsShipping": billing.same_as_shipping,
            "name": billing.name,
            "street": billing.street,
            "city": billing.city,
            "state": billing.state,
            "zipCode": billing.zip_code,
            "country": billing.country,
        }
        if billing
        else None,
        "pricing": {
            "subtotal": pricing.subtotal,
            "shippingCost": pricing.shipping_cost,
            "tax": pricing.tax,
            "discount": {
                "amount": pricing.discount_amount,
                "code": pricing.discount_code,
                "type": pricing.discount_type,
            },
            "totalAmount": pricing.total_amount,
        },
        "payment": {
            "method": order.payment_method,
            "status": order.payment_status,
            "transactionId": order.transaction_id,
            "paidAt": _iso(order.paid_at),
        },
        "status": order.status,
        "totalItems": order.total_items,
        "timeline": [
            {
                "status": entry.status,
                "timestamp": _iso(entry.timestamp),
                "note": entry.note,
                "updatedBy": str(entry.updated_by) if entry.updated_by else None,
            }
            for entry in sorted(order.timeline, key=lambda e: e.timestamp)
        ],
        "cancellation": {
            "reason": order.cancellation_reason,
            "cancelledBy": str(order.cancelled_by),
            "cancelledAt": _iso(order.cancelled_at),
            "refundStatus": order.refund_status,
            "refundAmount": order.refund_amount,
        }
        if order.cancelled_by
        else None,
        "return": {
            "requested": bool(order.return_requested),
            "reason": order.return_reason,
            "status": order.return_status,
            "requestedAt": _iso(order.return_requested_at),
        },
        "actualDelivery": _iso(order.actual_delivery),
        "createdAt": _iso(order.created_at),
        "updatedAt": _iso(order.updated_at),
    }


def present_review(review) -> dict:
    aspects = review.aspects
    return {
        "id": str(review.id),
        "product": str(review.product_id),
        "artisan": str(review.artisan_id),
        "customer": str(review.customer_id),
        "order": str(review.order_id),
        "rating": {
            "overall": review.overall_rating,
            "quality": aspects.quality if aspects else None,
            "craftsmanship": aspects.craftsmanship if aspects else None,
            "packaging": aspects.packaging if aspects else None,
            "shipping": aspects.shipping if aspects else None,
        },
        "title": review.title,
        "comment": review.comment,
        "pros": _json(review.pros, []),
        "cons": _json(review.cons, []),
        "wouldRecommend": review.would_recommend,
        "isVerifiedPurchase": review.is_verified_purchase,
        "helpfulVotes": review.helpful_votes,
        "response": {
            "comment": review.response_comment,
            "respondedAt": _iso(review.responded_at),
            "respondedBy": str(review.responded_by),
        }
        if review.response_comment
        else None,
        "status": review.status,
        "createdAt": _iso(review.created_at),
        "updatedAt": _iso(review.updated_at),
    }


def present_product(product) -> dict:
    return {
        "id": str(product.id),
        "artisan": str(product.artisan_id),
        "title": product.title,
        "description": product.description,
        "shortDescription": product.short_description,
        "category": product.category,
        "images": [{"url": img.url, "alt": img.alt, "isPrimary": img.is_primary} for img in product.images],
        "price": {
            "amount": product.price.amount,
            "currency": product.price.currency,
            "originalPrice": product.price.original_price,
            "discount": product.price.discount,
        },
        "discountedPrice": product.discounted_price,
        "inventory": {
            "quantity": product.quantity,
            "trackInventory": product.track_inventory,
            "lowStockThreshold": product.low_stock_threshold,
        },
        "stockStatus": product.stock_status,
        "tags": _json(product.tags, []),
        "rating": {"average": product.rating_average, "count": product.rating_count},
        "totalSold": product.total_sold,
        "isActive": product.is_active,
        "createdAt": _iso(product.created_at),
    }


def present_artisan(artisan) -> dict:
    location = artisan.location
    return {
        "id": str(artisan.id),
        "user": str(artisan.user_id),
        "businessName": artisan.business_name,
        "description": artisan.description,
        "specialties": _json(artisan.specialties, []),
        "experience": artisan.experience_years,
        "location": {"city": location.city, "state": location.state, "country": location.country}
        if location
        else None,
        "rating": {"average": artisan.rating_average, "count": artisan.rating_count},
        "verificationStatus": artisan.verification_status,
        "isActive": artisan.is_active,
    }


def present_cart(view) -> dict:
    summary = view.summary
    return {
        "items": [
            {
                "product": present_product(line.product),
                "quantity": line.item.quantity,
                "customization": _json(line.item.customization),
                "lineTotal": line.line_total,
                "addedAt": _iso(line.item.added_at),
            }
            for line in view.lines
        ],
        "summary": {
            "itemCount": summary["item_count"],
            "subtotal": summary["subtotal"],
            "estimatedShipping": summary["estimated_shipping"],
            "total": summary["total"],
        },
    }


def present_dashboard(dashboard: dict) -> dict:
    return {
        "stats": [
            {"status": entry["status"], "count": entry["count"], "totalAmount": entry["total_amount"]}
            for entry in dashboard["stats"]
        ],
        "recentOrders": [present_order(order) for order in dashboard["recent_orders"]],
    }
