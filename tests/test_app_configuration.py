from horizon.configuration.app_configuration import AppConfig, MessageTemplates

CONFIG = """
roles:
  staff: 1234
emojis:
  "yes": "👍"
moderation:
  flag_message_reaction: "987654321"
  swears:
    - heck
    - darn
messages:
  oops: "Whoops"
  not_a_template: "ignored"
"""


def test_reads_settings(tmp_path):
    path = tmp_path / "app_config.yml"
    path.write_text(CONFIG, encoding="utf-8")

    config = AppConfig(path)

    assert config.staff_role_id == 1234
    assert config.yes_emoji == "👍"
    assert config.flag_reaction == "987654321"
    assert config.swears == ["heck", "darn"]
    assert config.messages.oops == "Whoops"
    assert config.messages.eclass_subscribed == MessageTemplates().eclass_subscribed


def test_missing_file_yields_defaults(tmp_path):
    config = AppConfig(tmp_path / "absent.yml")

    assert config.data == {}
    assert config.staff_role_id is None
    assert config.yes_emoji == "✅"
    assert config.flag_reaction == "🚩"
    assert config.swears == []
    assert config.messages == MessageTemplates()


def test_reload_picks_up_changes(tmp_path):
    path = tmp_path / "app_config.yml"
    path.write_text("moderation:\n  swears: [heck]\n", encoding="utf-8")
    config = AppConfig(path)

    path.write_text("moderation:\n  swears: [darn]\n", encoding="utf-8")
    config.reload()

    assert config.swears == ["darn"]


def test_non_mapping_file_is_rejected(tmp_path):
    path = tmp_path / "app_config.yml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    assert AppConfig(path).data == {}


def test_unquoted_yes_key_is_still_read(tmp_path):
    path = tmp_path / "app_config.yml"
    path.write_text('emojis:\n  yes: "👍"\n', encoding="utf-8")

    assert AppConfig(path).yes_emoji == "👍"
