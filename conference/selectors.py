"""DOM selectors for the conference web client.

These mirror the markup of the application under test and carry no
compatibility guarantee across its releases.
"""

LOCAL_VIDEO_CONTAINER_ID = "localVideoContainer"
LOCAL_VIDEO_CONTAINER = f"#{LOCAL_VIDEO_CONTAINER_ID}"

FILMSTRIP_REMOTE_VIDEOS = "//div[@id='filmstripRemoteVideosContainer']"

VISIBLE_TOOLBAR = (
    "//*[contains(@class, 'toolbar_secondary')"
    " and contains(@class, 'slideInExtX')]"
)

LARGE_AVATAR = "//div[@id='dominantSpeaker']"
LOCAL_THUMBNAIL_AVATAR = (
    f"//span[@id='{LOCAL_VIDEO_CONTAINER_ID}']//img[contains(@class, 'userAvatar')]"
)

AUDIO_ONLY_LABEL_ICON = (
    "//div[@id='videoResolutionLabel']//i[contains(@class, 'icon-visibility-off')]"
)

CAMERA_BUTTON_ID = "toolbar_button_camera"
VIDEO_QUALITY_BUTTON_ID = "toolbar_button_videoquality"
VIDEO_QUALITY_SLIDER = ".video-quality-dialog-slider"

# Mute indicators keyed by kind: (wrapper class, icon class).
MUTE_ICONS = {
    "audio": ("audioMuted", "icon-mic-disabled"),
    "video": ("videoMuted", "icon-camera-disabled"),
}


def participant_container_id(endpoint_id: str) -> str:
    """Return the thumbnail container id of a remote participant."""
    return f"participant_{endpoint_id}"


def mute_icon(container_id: str, kind: str) -> str:
    """XPath of the mute icon of ``kind`` inside a thumbnail container."""
    wrapper_class, icon_class = MUTE_ICONS[kind]
    return (
        f"//span[@id='{container_id}']"
        f"//span[contains(@class, '{wrapper_class}')]"
        f"/i[contains(@class, '{icon_class}')]"
    )
