"""
EBS Resize - Main Entry Point

Simple entry point for the resize operation.

Usage:
    from ebs_resize.main import resize_volume

    outcome = resize_volume('i-0123456789abcdef0', 25, region='us-east-1')
"""

import asyncio
from dataclasses import replace

from ebs_resize.core.auth import SessionManager
from ebs_resize.core.config import ResizeConfig, create_resize_config
from ebs_resize.core.ec2 import EC2Adapter
from ebs_resize.core.exceptions import AuthenticationError
from ebs_resize.orchestration import ResizeOrchestrator, ResizeOutcome
from ebs_resize.utils.logger import print_header, setup_logging


async def resize_volume_async(adapter, instance_id: str, size: int,
                              config: ResizeConfig = None, logger=None) -> ResizeOutcome:
    """
    Resize the volume of a stopped instance through a given adapter.

    Args:
        adapter: Control-plane adapter
        instance_id: Instance whose volume is resized
        size: Target size in GB
        config: Optional ResizeConfig
        logger: Optional logger

    Returns:
        ResizeOutcome
    """
    orchestrator = ResizeOrchestrator(
        adapter=adapter,
        instance_id=instance_id,
        target_size=size,
        config=config,
        logger=logger
    )
    return await orchestrator.run()


def resize_volume(instance_id: str, size: int, region: str = None, zone: str = None,
                  config: ResizeConfig = None, debug: bool = False) -> ResizeOutcome:
    """
    Resize the single standard volume of a stopped instance.

    This will:
    1. Validate the instance is stopped and has one standard volume
    2. Detach the volume
    3. Snapshot it
    4. Create a volume of the target size from the snapshot
    5. Attach the new volume at the original device path

    Nothing is rolled back on failure. The original volume and the
    snapshot are never deleted.

    Args:
        instance_id: Instance id (e.g., 'i-0123456789abcdef0')
        size: Target size in GB
        region: AWS region (optional, resolved from the environment)
        zone: Require the instance to be in this availability zone (optional)
        config: Optional ResizeConfig for advanced settings
        debug: Enable debug logging (default: False)

    Returns:
        ResizeOutcome; check .success

    Example:
        >>> resize_volume('i-0123456789abcdef0', 25).success
        True
    """
    config = config or create_resize_config()
    if region:
        config = replace(config, region=region)
    if zone:
        config = replace(config, required_zone=zone)

    logger = setup_logging(
        level='DEBUG' if debug else config.log_level,
        log_file=config.log_file,
        debug=debug,
        info_to_stderr=config.log_to_stderr
    )

    print_header(logger, "EBS Resize")
    logger.info(f"Instance: {instance_id}")
    logger.info(f"Target size: {size} GB")
    if config.region:
        logger.info(f"Region: {config.region}")
    if config.required_zone:
        logger.info(f"Zone: {config.required_zone}")
    logger.info("")

    try:
        client, region = SessionManager(config.region).get_client()
    except AuthenticationError as e:
        logger.error(str(e))
        raise

    logger.debug(f"Using region: {region}")

    adapter = EC2Adapter(client, logger)
    outcome = asyncio.run(resize_volume_async(adapter, instance_id, size, config, logger))

    logger.info("")
    if not outcome.success:
        logger.error(f"Resize failed: {outcome.error}")
        return outcome

    if config.dry_run:
        logger.info("[OK] Validation passed. Dry run, nothing changed.")
        return outcome

    context = outcome.context
    print_header(logger, "[OK] Resize completed successfully!")
    logger.info("")
    logger.info(f"New volume: {context.new_volume.volume_id} ({context.new_volume.size} GB)")
    logger.info(f"Attached at: {context.device}")
    logger.info(f"Snapshot kept: {context.snapshot.snapshot_id}")
    logger.info(f"Original volume kept: {context.source_volume.volume_id}")
    logger.info("")
    logger.info("Next steps (on the instance, after starting it):")
    logger.info("  - Use `lsblk` to see the new size")
    logger.info("  - Grow the filesystem, e.g. `sudo resize2fs <device>` (ext4)")

    return outcome
