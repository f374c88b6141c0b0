import pytest

from amic_invisible.core.config import GameConfig, Participant, TwilioCredentials
from amic_invisible.services.game_flow import GameContext
from amic_invisible.services.lookup import ParticipantDirectory
from amic_invisible.storage import DataStore

PUBLIC_URL = "http://santa.test"
LINK_PREFIX = "link"


def make_config(*names, skip_sms=True):
    people = tuple(Participant(name=name, phone=f"+3460000{index:04d}") for index, name in enumerate(names))
    twilio = None if skip_sms else TwilioCredentials("AC123", "secret", "+15550000000")
    return GameConfig(people=people, skip_sms=skip_sms, twilio=twilio)


def make_context(data_dir, config):
    return GameContext(
        config=config,
        store=DataStore(str(data_dir)),
        directory=ParticipantDirectory(config.people),
        public_url=PUBLIC_URL,
        link_path_prefix=LINK_PREFIX,
    )


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def context(data_dir):
    return make_context(data_dir, make_config("Alice", "Bob", "Carol"))
