"""Cart resolution for a request only writes once the caller is authorized."""

import pytest
from protean import current_domain

from storefront.identity.ability import MANAGE, Ability
from storefront.identity.actor import Actor
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.items import AddToCart
from storefront.shared.errors import AuthorizationDenied
from storefront.web.dependencies import resolve_cart


def _locked_out(actor):
    ability = Ability(actor)
    ability.deny(MANAGE, "Cart")
    return ability


class TestResolveCart:
    def test_guest_gets_their_session_cart(self):
        actor = Actor.guest("sess-open")

        cart = resolve_cart(actor, Ability(actor), "update")

        assert cart.session_id == "sess-open"
        assert current_domain.repository_for(Cart).for_session("sess-open").id == cart.id

    def test_refused_guest_gets_no_cart_created(self):
        actor = Actor.guest("sess-locked")

        with pytest.raises(AuthorizationDenied):
            resolve_cart(actor, _locked_out(actor), "update")

        assert current_domain.repository_for(Cart).for_session("sess-locked") is None

    def test_refused_user_leaves_guest_cart_unmerged(self, customer, product):
        guest_cart = Cart.create(session_id="sess-1")
        current_domain.repository_for(Cart).add(guest_cart)
        current_domain.process(AddToCart(cart_id=guest_cart.id, product=product.slug), asynchronous=False)
        actor = Actor.for_user(customer, "sess-1")

        with pytest.raises(AuthorizationDenied):
            resolve_cart(actor, _locked_out(actor), "update")

        repo = current_domain.repository_for(Cart)
        assert len(repo.for_session("sess-1").items) == 1
        assert repo.for_user(customer.id) is None
