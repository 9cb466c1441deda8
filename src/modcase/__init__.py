"""
modcase - moderation case notifications for Discord

Announces moderation case events to the people concerned:

- **Direct messages**: the punished user is told about new and updated cases
  in the guild's preferred language, with a link to the case.
- **Public webhook**: an optional per-guild channel where punishments are
  announced to the community.
- **Internal webhook**: an optional per-guild staff channel receiving every
  case, comment, file, user note and user mapping change.

Usage:
    from modcase.bootstrap import announcer_session

    async with announcer_session() as announcer:
        await announcer.announce_mod_case(case, RestAction.CREATED, actor, True, True)
"""
