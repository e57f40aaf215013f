"""RegisterArtisan — a seller creates their artisan profile."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.access import Role, require
from marketplace.catalogue.artisan import Artisan
from marketplace.domain import marketplace


@marketplace.command(part_of="Artisan")
class RegisterArtisan:
    user_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    business_name = String(required=True, max_length=100)
    description = Text(required=True)
    location = Text(required=True)  # JSON: {city, state, country}
    specialties = Text()  # JSON array of strings
    experience_years = Integer(default=0)


@marketplace.command_handler(part_of=Artisan)
class RegisterArtisanHandler:
    @handle(RegisterArtisan)
    def register_artisan(self, command):
        require(
            command.actor_role in (Role.SELLER.value, Role.ADMIN.value),
            "Only sellers can register an artisan profile",
        )

        repo = current_domain.repository_for(Artisan)
        if repo.find_by_user(command.user_id) is not None:
            raise ValidationError({"user_id": ["An artisan profile already exists for this user"]})

        artisan = Artisan.register(
            user_id=command.user_id,
            business_name=command.business_name,
            description=command.description,
            location=json.loads(command.location),
            specialties=json.loads(command.specialties) if command.specialties else None,
            experience_years=command.experience_years or 0,
        )
        repo.add(artisan)
        return str(artisan.id)
